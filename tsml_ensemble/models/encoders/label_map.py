"""
Label map between class labels and dense integer indices.
"""

import numpy as np
from sklearn.preprocessing import LabelEncoder

from tsml_ensemble.exceptions import InconsistentDataError, UnseenLabelError
from tsml_ensemble.models.base import to_labels


class LabelMap:
    """
    Bijection between distinct label values and ``range(num_classes)``.

    Built once from the full label set; lookups never add labels, so a
    value outside the fitted set raises ``UnseenLabelError``.
    """

    def __init__(self, encoder: LabelEncoder):
        self._encoder = encoder

    @classmethod
    def from_labels(cls, labels: np.ndarray) -> "LabelMap":
        """Build the map from every distinct value in labels."""
        labels = to_labels(labels)
        if len(labels) == 0:
            raise InconsistentDataError("Cannot build a label map from zero labels")
        return cls(LabelEncoder().fit(labels))

    @property
    def classes(self) -> np.ndarray:
        """Labels ordered by their class index."""
        return self._encoder.classes_

    @property
    def num_classes(self) -> int:
        return len(self._encoder.classes_)

    def __len__(self) -> int:
        return self.num_classes

    def __contains__(self, label) -> bool:
        return bool(np.any(self.classes == label))

    def encode(self, labels: np.ndarray) -> np.ndarray:
        """Map labels to class indices."""
        labels = to_labels(labels)
        try:
            return self._encoder.transform(labels)
        except (ValueError, TypeError) as exc:
            unseen = [label for label in dict.fromkeys(labels.tolist()) if label not in self]
            raise UnseenLabelError(
                f"Labels not present at fit time: {unseen[:10]}"
            ) from exc

    def decode(self, indices: np.ndarray) -> np.ndarray:
        """Map class indices back to labels."""
        indices = np.asarray(indices)
        if np.any((indices < 0) | (indices >= self.num_classes)):
            raise UnseenLabelError(
                f"Class indices must lie in [0, {self.num_classes})"
            )
        return self.classes[indices]

    def __repr__(self) -> str:
        return f"LabelMap(classes={self.classes.tolist()})"
