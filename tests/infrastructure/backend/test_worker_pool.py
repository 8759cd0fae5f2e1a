from unittest import TestCase
import threading
import unittest

from kranium.infrastructure.backend._worker_pool import (
    get_worker_pool,
    partition,
    run_ranges,
)


class TestPartition(TestCase):
    def test_ranges_cover_total_contiguously(self):
        for total in (1, 2, 7, 10, 100):
            for parts in (1, 2, 3, 8, 200):
                with self.subTest(total=total, parts=parts):
                    ranges = partition(total, parts)
                    self.assertEqual(ranges[0][0], 0)
                    self.assertEqual(ranges[-1][1], total)
                    for (s0, e0), (s1, _) in zip(ranges, ranges[1:]):
                        self.assertEqual(e0, s1)
                    self.assertTrue(all(e > s for s, e in ranges))
                    self.assertLessEqual(len(ranges), parts)

    def test_balanced(self):
        sizes = [e - s for s, e in partition(10, 3)]
        self.assertEqual(sizes, [4, 3, 3])

    def test_empty(self):
        self.assertEqual(partition(0, 4), [])


class TestRunRanges(TestCase):
    def test_pool_is_shared_per_size(self):
        self.assertIs(get_worker_pool(2), get_worker_pool(2))
        self.assertIsNot(get_worker_pool(2), get_worker_pool(3))

    def test_invalid_pool_size(self):
        with self.assertRaises(ValueError):
            get_worker_pool(0)

    def test_every_range_runs_on_worker_threads(self):
        seen = []
        lock = threading.Lock()

        def work(start, stop):
            with lock:
                seen.append((start, stop, threading.current_thread().name))

        ranges = partition(12, 4)
        run_ranges(work, ranges, max_workers=4)

        self.assertEqual(sorted((s, e) for s, e, _ in seen), ranges)
        self.assertTrue(all(name.startswith("kranium-worker") for _, _, name in seen))

    def test_single_range_runs_inline(self):
        names = []
        run_ranges(lambda s, e: names.append(threading.current_thread().name), [(0, 5)], 4)
        self.assertEqual(names, [threading.current_thread().name])

    def test_exception_propagates_after_join(self):
        done = []

        def work(start, stop):
            if start == 0:
                raise RuntimeError("boom")
            done.append(start)

        ranges = partition(8, 4)
        with self.assertRaises(RuntimeError):
            run_ranges(work, ranges, max_workers=4)
        self.assertEqual(sorted(done), [s for s, _ in ranges[1:]])

    def test_nested_calls_do_not_deadlock(self):
        out = []
        lock = threading.Lock()

        def inner(start, stop):
            with lock:
                out.append((start, stop))

        def outer(start, stop):
            run_ranges(inner, partition(stop - start, 2), max_workers=2)

        run_ranges(outer, partition(4, 2), max_workers=2)
        self.assertEqual(len(out), 4)


if __name__ == "__main__":
    unittest.main()
