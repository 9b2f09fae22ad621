import math
import unittest
from concurrent.futures import ThreadPoolExecutor

from bigrational import ONE, ZERO, BigRational, DomainError, bernoulli, factorial
from bigrational import caches
from bigrational.caches import FACTORIAL_CACHE_SIZE

FACTORIAL_101 = (
    "9425947759838359420851623124482936749562312794702543768327889353416977599316221476503087861591808346911623490003549599583369706302603264000000000000000000000000"
)


class FactorialTests(unittest.TestCase):
    def test_small_values(self):
        expected = ["1", "1", "2", "6", "24", "120"]
        self.assertEqual([str(factorial(n)) for n in range(6)], expected)

    def test_values_beyond_cache(self):
        self.assertEqual(str(factorial(101)), FACTORIAL_101)
        n = FACTORIAL_CACHE_SIZE + 50
        self.assertEqual(factorial(n), factorial(n - 1).multiply(n))
        self.assertEqual(factorial(n), math.factorial(n))

    def test_cached_instances_are_reused(self):
        self.assertIs(factorial(10), factorial(10))

    def test_negative(self):
        with self.assertRaises(DomainError):
            factorial(-1)
        with self.assertRaises(ValueError):
            factorial(-5)

    def test_concurrent_extension(self):
        indices = list(range(400, 480))
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(factorial, indices))
        for n, value in zip(indices, results):
            self.assertEqual(value, math.factorial(n))

    def test_extension_is_logged(self):
        with self.assertLogs("bigrational.caches", level="DEBUG") as captured:
            factorial(len(caches._factorial_cache) + 10)
        self.assertTrue(any("factorial cache extended" in line for line in captured.output))


class BernoulliTests(unittest.TestCase):
    def test_known_values(self):
        self.assertEqual(bernoulli(0), ONE)
        self.assertEqual(bernoulli(1), BigRational(1, 2))
        self.assertEqual(bernoulli(2), BigRational(1, 6))
        self.assertEqual(bernoulli(4), BigRational(-1, 30))
        self.assertEqual(bernoulli(12), BigRational(-691, 2730))
        self.assertEqual(bernoulli(20), BigRational(-17611, 330))

    def test_odd_indices_are_zero(self):
        for n in (3, 5, 17, 101):
            self.assertEqual(bernoulli(n), ZERO)

    def test_out_of_range(self):
        with self.assertRaises(DomainError):
            bernoulli(-1)
        with self.assertRaises(DomainError):
            bernoulli(22)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
