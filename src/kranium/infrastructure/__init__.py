"""
NumPy-backed infrastructure: dtype handling, configuration, CPU backends,
and the concrete Tensor.
"""
