"""
Datasets package public API.

    from sorttrace.datasets import make_dataset, generate_test_array, SUPPORTED_DISTS
"""

from .generators import SUPPORTED_DISTS, generate_test_array, make_dataset

__all__ = ["SUPPORTED_DISTS", "generate_test_array", "make_dataset"]
