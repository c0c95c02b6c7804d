"""
Encoders turning categorical predictions into numeric features.
"""

from tsml_ensemble.models.encoders.label_map import LabelMap

__all__ = ["LabelMap"]
