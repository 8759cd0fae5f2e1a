import copy
import os
import unittest
from unittest import mock

import numpy as np

from kranium import CpuBackend, ParallelCpuBackend, Tensor
from kranium.domain import (
    DataLengthError,
    InvalidShapeError,
    UnsupportedDTypeError,
)


class TestTensorConstruction(unittest.TestCase):
    def test_new_allocates_default_elements(self):
        t = Tensor((2, 3), CpuBackend())
        self.assertEqual(t.shape, (2, 3))
        self.assertEqual(t.strides, (3, 1))
        self.assertEqual(t.ndim, 2)
        self.assertEqual(t.size, 6)
        self.assertEqual(t.dtype, np.float32)
        self.assertEqual(t.tolist(), [0.0] * 6)

    def test_new_with_dtype(self):
        t = Tensor([4], CpuBackend(), dtype=np.int16)
        self.assertEqual(t.dtype, np.int16)
        self.assertEqual(t.tolist(), [0, 0, 0, 0])

    def test_zeros_shape_dtype_and_values(self):
        x = Tensor.zeros((2, 3), CpuBackend())
        arr = x.to_numpy()
        self.assertEqual(arr.shape, (2, 3))
        self.assertEqual(arr.dtype, np.float32)
        np.testing.assert_array_equal(arr, np.zeros((2, 3), dtype=np.float32))

    def test_ones_shape_dtype_and_values(self):
        x = Tensor.ones((2, 3), CpuBackend(), dtype=np.float64)
        arr = x.to_numpy()
        self.assertEqual(arr.dtype, np.float64)
        np.testing.assert_array_equal(arr, np.ones((2, 3)))

    def test_ones_integer(self):
        x = Tensor.ones((3,), CpuBackend(), dtype=np.uint8)
        self.assertEqual(x.tolist(), [1, 1, 1])

    def test_from_data(self):
        t = Tensor.from_data([1.0, 2.0, 3.0, 4.0], (2, 2), CpuBackend())
        self.assertEqual(t.shape, (2, 2))
        self.assertEqual(t.get((1, 0)), 3.0)

    def test_from_data_infers_dtype(self):
        self.assertEqual(Tensor.from_data(np.arange(4, dtype=np.int32), (4,)).dtype, np.int32)
        self.assertEqual(Tensor.from_data([1.5, 2.5], (2,)).dtype, np.float64)

    def test_from_data_copies_input(self):
        src = np.array([1.0, 2.0, 3.0], dtype=np.float32)
        t = Tensor.from_data(src, (3,), CpuBackend())
        src[0] = 99.0
        self.assertEqual(t.get((0,)), 1.0)

    def test_from_data_length_mismatch(self):
        with self.assertRaises(DataLengthError) as cm:
            Tensor.from_data([1.0, 2.0, 3.0], (2, 2), CpuBackend())
        self.assertEqual((cm.exception.length, cm.exception.expected), (3, 4))

    def test_from_data_rejects_nested_data(self):
        with self.assertRaises(InvalidShapeError):
            Tensor.from_data([[1.0, 2.0], [3.0, 4.0]], (2, 2))

    def test_from_numpy_keeps_shape(self):
        arr = np.arange(6, dtype=np.float64).reshape(2, 3)
        t = Tensor.from_numpy(arr, CpuBackend())
        self.assertEqual(t.shape, (2, 3))
        np.testing.assert_array_equal(t.to_numpy(), arr)

    def test_from_numpy_fortran_order_is_read_row_major(self):
        arr = np.asfortranarray(np.arange(6, dtype=np.float32).reshape(2, 3))
        t = Tensor.from_numpy(arr)
        self.assertEqual(t.tolist(), [0.0, 1.0, 2.0, 3.0, 4.0, 5.0])

    def test_zero_dimensional(self):
        t = Tensor((), CpuBackend())
        self.assertEqual(t.size, 1)
        self.assertEqual(t.strides, ())
        self.assertEqual(t.get(()), 0.0)
        with self.assertRaises(TypeError):
            len(t)

    def test_empty_dimension(self):
        t = Tensor.ones((3, 0), CpuBackend())
        self.assertEqual(t.size, 0)
        self.assertEqual(len(t), 3)

    def test_invalid_shape(self):
        with self.assertRaises(InvalidShapeError):
            Tensor((2, -3))
        with self.assertRaises(InvalidShapeError):
            Tensor.zeros((2.5,))

    def test_unsupported_dtype(self):
        with self.assertRaises(UnsupportedDTypeError):
            Tensor.zeros((2,), dtype=np.complex64)
        with self.assertRaises(UnsupportedDTypeError):
            Tensor.from_data([True, False], (2,))

    def test_default_backend_and_dtype_follow_environment(self):
        env = {"KRANIUM_BACKEND": "cpu_parallel", "KRANIUM_DEFAULT_DTYPE": "float64"}
        with mock.patch.dict(os.environ, env):
            t = Tensor.zeros((2,))
        self.assertIsInstance(t.backend, ParallelCpuBackend)
        self.assertEqual(t.dtype, np.float64)

    def test_compute_strides_static(self):
        self.assertEqual(Tensor.compute_strides((2, 3, 4)), (12, 4, 1))
        self.assertEqual(Tensor.compute_strides([5]), (1,))


class TestTensorDataAccess(unittest.TestCase):
    def test_data_view_is_read_only(self):
        t = Tensor.ones((2, 2), CpuBackend())
        view = t.data
        self.assertEqual(view.shape, (4,))
        with self.assertRaises(ValueError):
            view[0] = 5.0

    def test_data_mut_writes_through(self):
        t = Tensor.zeros((2, 2), CpuBackend())
        t.data_mut()[3] = 7.0
        self.assertEqual(t.get((1, 1)), 7.0)

    def test_clone_is_independent(self):
        t = Tensor.from_data([1.0, 2.0], (2,), ParallelCpuBackend(num_workers=2))
        c = t.clone()
        c.set((0,), 10.0)
        self.assertEqual(t.get((0,)), 1.0)
        self.assertEqual(c.backend, t.backend)
        self.assertIsNot(c.backend, t.backend)

    def test_copy_protocol(self):
        t = Tensor.from_data([1.0, 2.0], (2,), CpuBackend())
        for c in (copy.copy(t), copy.deepcopy(t)):
            self.assertTrue(c.equal(t))
            self.assertFalse(np.shares_memory(c.data, t.data))

    def test_to_numpy_is_a_copy(self):
        t = Tensor.zeros((2, 2), CpuBackend())
        arr = t.to_numpy()
        arr[0, 0] = 1.0
        self.assertEqual(t.get((0, 0)), 0.0)

    def test_equal(self):
        a = Tensor.from_data([1.0, 2.0], (2,), CpuBackend())
        self.assertTrue(a.equal(Tensor.from_data([1.0, 2.0], (2,), CpuBackend())))
        self.assertFalse(a.equal(Tensor.from_data([1.0, 2.0], (1, 2), CpuBackend())))
        self.assertFalse(a.equal(Tensor.from_data([1.0, 2.0], (2,), dtype=np.float32)))
        self.assertFalse(a.equal([1.0, 2.0]))

    def test_repr(self):
        t = Tensor.from_data([1.0, 2.0], (1, 2), CpuBackend(), dtype=np.float32)
        r = repr(t)
        self.assertIn("shape=(1, 2)", r)
        self.assertIn("dtype=float32", r)
        self.assertIn("backend=cpu", r)
        self.assertIn("data=[1.0, 2.0]", r)


if __name__ == "__main__":
    unittest.main()
