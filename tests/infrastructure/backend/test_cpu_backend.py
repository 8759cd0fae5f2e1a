from unittest import TestCase
import unittest
import numpy as np

from kranium.infrastructure.backend import CpuBackend
from kranium.domain._errors import (
    DivisionByZeroError,
    DivisionOverflowError,
    InvalidShapeError,
    LengthMismatchError,
    MatmulShapeError,
    PreconditionError,
    UnsupportedDTypeError,
)


class TestCpuBackendAllocation(TestCase):
    def setUp(self):
        self.backend = CpuBackend()

    def test_allocate_returns_full_length_buffer(self):
        buf = self.backend.allocate((2, 3), np.float32)
        self.assertEqual(len(buf), 6)
        self.assertEqual(buf.dtype, np.float32)
        self.assertTrue(np.all(buf == 0))

    def test_allocate_defaults_to_float32(self):
        buf = self.backend.allocate((4,))
        self.assertEqual(buf.dtype, np.float32)

    def test_zeros(self):
        zeros = self.backend.zeros((2, 2), np.float32)
        np.testing.assert_array_equal(zeros, np.zeros(4, dtype=np.float32))

    def test_ones(self):
        ones = self.backend.ones((3,), np.float32)
        np.testing.assert_array_equal(ones, np.ones(3, dtype=np.float32))

    def test_ones_integer_dtype(self):
        ones = self.backend.ones((2, 2), np.uint8)
        self.assertEqual(ones.dtype, np.uint8)
        self.assertEqual(ones.tolist(), [1, 1, 1, 1])

    def test_empty_shape_holds_one_element(self):
        self.assertEqual(len(self.backend.zeros((), np.float64)), 1)

    def test_zero_dimension_gives_empty_buffer(self):
        self.assertEqual(len(self.backend.ones((3, 0), np.float64)), 0)

    def test_negative_dimension_raises(self):
        with self.assertRaises(InvalidShapeError):
            self.backend.zeros((2, -1))

    def test_non_numeric_dtype_raises(self):
        for dt in (np.bool_, np.complex64, object, "U3"):
            with self.subTest(dtype=dt):
                with self.assertRaises(UnsupportedDTypeError):
                    self.backend.zeros((2,), dt)


class TestCpuBackendElementwise(TestCase):
    def setUp(self):
        self.backend = CpuBackend()

    def test_add(self):
        result = self.backend.add(
            np.array([1.0, 2.0, 3.0]), np.array([4.0, 5.0, 6.0])
        )
        self.assertEqual(result.tolist(), [5.0, 7.0, 9.0])

    def test_sub(self):
        result = self.backend.sub(
            np.array([5.0, 6.0, 7.0]), np.array([2.0, 1.0, 3.0])
        )
        self.assertEqual(result.tolist(), [3.0, 5.0, 4.0])

    def test_mul(self):
        result = self.backend.mul(
            np.array([2.0, 3.0, 4.0]), np.array([5.0, 6.0, 7.0])
        )
        self.assertEqual(result.tolist(), [10.0, 18.0, 28.0])

    def test_div(self):
        result = self.backend.div(
            np.array([8.0, 9.0, 10.0]), np.array([2.0, 3.0, 5.0])
        )
        self.assertEqual(result.tolist(), [4.0, 3.0, 2.0])

    def test_accepts_python_lists(self):
        result = self.backend.add([1, 2], [3, 4])
        self.assertEqual(result.tolist(), [4, 6])

    def test_inputs_are_not_mutated(self):
        a = np.array([1.0, 2.0], dtype=np.float32)
        b = np.array([3.0, 4.0], dtype=np.float32)
        out = self.backend.add(a, b)
        self.assertEqual(a.tolist(), [1.0, 2.0])
        self.assertEqual(b.tolist(), [3.0, 4.0])
        self.assertFalse(np.shares_memory(out, a))
        self.assertFalse(np.shares_memory(out, b))

    def test_length_mismatch_raises_for_every_op(self):
        a = np.array([1.0, 2.0, 3.0])
        b = np.array([1.0, 2.0])
        for op in ("add", "sub", "mul", "div"):
            with self.subTest(op=op):
                with self.assertRaises(LengthMismatchError) as cm:
                    getattr(self.backend, op)(a, b)
                self.assertEqual(cm.exception.op, op)
                self.assertEqual((cm.exception.len_a, cm.exception.len_b), (3, 2))

    def test_length_mismatch_is_a_precondition_error(self):
        with self.assertRaises(PreconditionError):
            self.backend.add([1.0, 2.0, 3.0], [1.0, 2.0])
        with self.assertRaises(ValueError):
            self.backend.add([1.0, 2.0, 3.0], [1.0, 2.0])

    def test_float_division_by_zero_follows_ieee(self):
        result = self.backend.div(np.array([1.0, -1.0, 0.0]), np.array([0.0, 0.0, 0.0]))
        self.assertEqual(result[0], np.inf)
        self.assertEqual(result[1], -np.inf)
        self.assertTrue(np.isnan(result[2]))

    def test_integer_division_truncates_toward_zero(self):
        a = np.array([7, -7, 7, -7, 6], dtype=np.int32)
        b = np.array([2, 2, -2, -2, 3], dtype=np.int32)
        result = self.backend.div(a, b)
        self.assertEqual(result.dtype, np.int32)
        self.assertEqual(result.tolist(), [3, -3, -3, 3, 2])

    def test_unsigned_division(self):
        a = np.array([9, 10, 255], dtype=np.uint8)
        b = np.array([2, 5, 16], dtype=np.uint8)
        self.assertEqual(self.backend.div(a, b).tolist(), [4, 2, 15])

    def test_integer_division_by_zero_raises(self):
        with self.assertRaises(DivisionByZeroError):
            self.backend.div(np.array([1, 2], dtype=np.int64), np.array([1, 0], dtype=np.int64))
        with self.assertRaises(ZeroDivisionError):
            self.backend.div(np.array([1], dtype=np.int64), np.array([0], dtype=np.int64))

    def test_signed_division_overflow_raises(self):
        for dt in (np.int8, np.int32, np.int64):
            with self.subTest(dtype=dt):
                a = np.array([6, np.iinfo(dt).min], dtype=dt)
                b = np.array([-1, -1], dtype=dt)
                with self.assertRaises(DivisionOverflowError):
                    self.backend.div(a, b)
                with self.assertRaises(OverflowError):
                    self.backend.div(a, b)

    def test_minimum_divided_by_other_values_is_fine(self):
        a = np.array([np.iinfo(np.int32).min, -7], dtype=np.int32)
        b = np.array([1, -1], dtype=np.int32)
        self.assertEqual(self.backend.div(a, b).tolist(), [np.iinfo(np.int32).min, 7])

    def test_unsigned_division_by_max_value_is_fine(self):
        a = np.array([255, 0], dtype=np.uint8)
        b = np.array([255, 255], dtype=np.uint8)
        self.assertEqual(self.backend.div(a, b).tolist(), [1, 0])

    def test_empty_buffers(self):
        out = self.backend.mul(np.array([], dtype=np.float32), np.array([], dtype=np.float32))
        self.assertEqual(out.size, 0)

    def test_non_flat_buffer_rejected(self):
        with self.assertRaises(InvalidShapeError):
            self.backend.add(np.ones((2, 2)), np.ones((2, 2)))


class TestCpuBackendMatmul(TestCase):
    def setUp(self):
        self.backend = CpuBackend()

    def test_matmul(self):
        # A: 2x3, B: 3x2
        a = np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        b = np.array([7.0, 8.0, 9.0, 10.0, 11.0, 12.0])
        result = self.backend.matmul(a, (2, 3), b, (3, 2))
        self.assertEqual(result.tolist(), [58.0, 64.0, 139.0, 154.0])

    def test_matmul_integer(self):
        result = self.backend.matmul([1, 2, 3, 4, 5, 6], [2, 3], [7, 8, 9, 10, 11, 12], [3, 2])
        self.assertEqual(result.tolist(), [58, 64, 139, 154])

    def test_matmul_matches_numpy(self):
        rng = np.random.default_rng(0)
        a = rng.standard_normal((5, 7))
        b = rng.standard_normal((7, 4))
        result = self.backend.matmul(a.ravel(), a.shape, b.ravel(), b.shape)
        np.testing.assert_allclose(result.reshape(5, 4), a @ b, rtol=1e-12, atol=1e-12)

    def test_matmul_accumulates_in_ascending_order(self):
        # (1e8 + 1) - 1e8 in float32: ascending order loses the 1
        a = np.array([1e8, 1.0, -1e8], dtype=np.float32)
        b = np.array([1.0, 1.0, 1.0], dtype=np.float32)
        result = self.backend.matmul(a, (1, 3), b, (3, 1))

        expected = np.float32(0)
        for x in a:
            expected = np.float32(expected + x * np.float32(1))
        self.assertEqual(result[0], expected)
        self.assertEqual(result[0], np.float32(0.0))

    def test_matmul_empty_contraction_is_zero(self):
        result = self.backend.matmul(np.array([], dtype=np.float64), (2, 0), np.array([], dtype=np.float64), (0, 3))
        self.assertEqual(result.tolist(), [0.0] * 6)

    def test_matmul_rejects_non_2d(self):
        with self.assertRaises(MatmulShapeError):
            self.backend.matmul(np.ones(6), (1, 2, 3), np.ones(6), (3, 2))
        with self.assertRaises(MatmulShapeError):
            self.backend.matmul(np.ones(6), (2, 3), np.ones(3), (3,))

    def test_matmul_rejects_inner_mismatch(self):
        with self.assertRaises(MatmulShapeError):
            self.backend.matmul(np.ones(6), (2, 3), np.ones(4), (2, 2))

    def test_matmul_rejects_buffer_shape_disagreement(self):
        with self.assertRaises(MatmulShapeError):
            self.backend.matmul(np.ones(5), (2, 3), np.ones(6), (3, 2))


if __name__ == "__main__":
    unittest.main()
