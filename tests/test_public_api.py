import importlib
import unittest


class TestPublicApi(unittest.TestCase):
    def test_every_exported_name_resolves(self):
        kranium = importlib.import_module("kranium")
        for name in kranium.__all__:
            with self.subTest(name=name):
                self.assertTrue(hasattr(kranium, name))

    def test_tensor_modules_import(self):
        for module in (
            "kranium.infrastructure.tensor._arithmetic",
            "kranium.infrastructure.tensor._shape_and_indexing",
            "kranium.infrastructure.tensor._tensor",
        ):
            with self.subTest(module=module):
                importlib.import_module(module)

    def test_top_level_round_trip(self):
        from kranium import CpuBackend, ParallelCpuBackend, Tensor

        a = Tensor.from_data([1.0, 2.0, 3.0, 4.0], (2, 2), CpuBackend())
        b = Tensor.from_data([1.0, 2.0, 3.0, 4.0], (2, 2), ParallelCpuBackend(num_workers=2))
        self.assertEqual((a @ b).tolist(), [7.0, 10.0, 15.0, 22.0])
        self.assertEqual((a + a).T.tolist(), [2.0, 6.0, 4.0, 8.0])


if __name__ == "__main__":
    unittest.main()
