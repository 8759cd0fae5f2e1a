"""
Concrete tensor implementation and its mixins.
"""

from ._tensor import Tensor

__all__ = [Tensor.__name__]
