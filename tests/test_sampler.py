import unittest
from unittest import mock

import numpy as np
from scipy.special import expit

from wine_mh.chain import SamplerState
from wine_mh.posterior import log_posterior
from wine_mh.sampler import MetropolisHastingsSampler, SamplerCorruptionError

TRUE_BETA = np.array([0.5, -1.2, 0.3])


def make_logistic_data(n_rows: int = 100, seed: int = 2024):
    rng = np.random.default_rng(seed)
    X = np.column_stack([np.ones(n_rows), rng.normal(size=(n_rows, 2))])
    y = (rng.random(n_rows) < expit(X @ TRUE_BETA)).astype(int)
    return X, y


class TestSamplerRun(unittest.TestCase):
    def setUp(self) -> None:
        self.X, self.y = make_logistic_data()

    def _run(self, n_samples: int = 400, seed: int = 11, **kwargs) -> MetropolisHastingsSampler:
        sampler = MetropolisHastingsSampler(n_samples=n_samples, random_state=seed)
        return sampler.sample(self.X, self.y, TRUE_BETA, **kwargs)

    def test_chain_rows_are_finite_and_consistent(self) -> None:
        sampler = self._run()
        samples = sampler.samples_

        self.assertEqual(sampler.state_, SamplerState.DONE)
        self.assertEqual(samples.shape, (400, 3))
        self.assertTrue(np.all(np.isfinite(samples)))
        np.testing.assert_array_equal(samples[0], TRUE_BETA)

        moves = int(np.sum(np.any(samples[1:] != samples[:-1], axis=1)))
        self.assertEqual(moves, sampler.n_accepted_)
        self.assertEqual(sampler.n_iter_, 399)

    def test_acceptance_counter_is_monotone_and_bounded(self) -> None:
        seen = []
        sampler = MetropolisHastingsSampler(n_samples=300, random_state=5)

        def record() -> bool:
            seen.append(sampler.n_accepted_)
            return False

        sampler.sample(self.X, self.y, TRUE_BETA, should_stop=record)

        self.assertEqual(len(seen), 299)
        self.assertTrue(all(a <= b for a, b in zip(seen, seen[1:])))
        self.assertTrue(0 <= sampler.n_accepted_ <= 299)
        self.assertTrue(0.0 <= sampler.acceptance_rate_ <= 1.0)
        self.assertAlmostEqual(sampler.acceptance_rate_, sampler.n_accepted_ / 299)

    def test_fixed_seed_is_byte_reproducible(self) -> None:
        first = self._run(seed=123).samples_
        second = self._run(seed=123).samples_
        other = self._run(seed=124).samples_

        self.assertEqual(first.tobytes(), second.tobytes())
        self.assertNotEqual(first.tobytes(), other.tobytes())

    def test_zero_covariance_gives_constant_chain(self) -> None:
        sampler = self._run(n_samples=50, proposal_cov=np.zeros((3, 3)))

        np.testing.assert_array_equal(sampler.samples_, np.tile(TRUE_BETA, (50, 1)))
        # newpost == oldpost is a tie and ties accept
        self.assertEqual(sampler.n_accepted_, 49)
        self.assertEqual(sampler.acceptance_rate_, 1.0)

    def test_non_finite_proposal_is_rejected(self) -> None:
        start = log_posterior(TRUE_BETA, self.X, self.y)
        bad_values = iter([np.nan, -np.inf, np.inf] * 10)

        def fake_log_posterior(beta, *args):
            return start if np.array_equal(beta, TRUE_BETA) else next(bad_values)

        with mock.patch("wine_mh.sampler.log_posterior", side_effect=fake_log_posterior):
            sampler = self._run(n_samples=31)

        self.assertEqual(sampler.n_accepted_, 0)
        np.testing.assert_array_equal(sampler.samples_, np.tile(TRUE_BETA, (31, 1)))

    def test_current_state_going_non_finite_mid_run_is_corruption(self) -> None:
        start = log_posterior(TRUE_BETA, self.X, self.y)
        current_calls = []

        def fake_log_posterior(beta, *args):
            if not np.array_equal(beta, TRUE_BETA):
                return -np.inf
            current_calls.append(1)
            return start if len(current_calls) <= 3 else np.nan

        sampler = MetropolisHastingsSampler(n_samples=20, random_state=0)
        with mock.patch("wine_mh.sampler.log_posterior", side_effect=fake_log_posterior):
            with self.assertRaisesRegex(SamplerCorruptionError, "iter=3"):
                sampler.sample(self.X, self.y, TRUE_BETA)

        self.assertEqual(sampler.state_, SamplerState.SAMPLING)
        self.assertEqual(len(sampler.chain_), 3)

    def test_cooperative_cancellation_freezes_partial_chain(self) -> None:
        sampler = MetropolisHastingsSampler(n_samples=100, random_state=1)
        sampler.sample(self.X, self.y, TRUE_BETA, should_stop=lambda: len(sampler.chain_) >= 10)

        self.assertTrue(sampler.cancelled_)
        self.assertEqual(sampler.state_, SamplerState.DONE)
        self.assertEqual(len(sampler.chain_), 10)
        self.assertTrue(sampler.chain_.frozen)
        self.assertAlmostEqual(sampler.acceptance_rate_, sampler.n_accepted_ / 9)

    def test_verbose_reports_progress(self) -> None:
        sampler = MetropolisHastingsSampler(n_samples=21, report_every=10, random_state=0, verbose=True)
        with mock.patch("builtins.print") as fake_print:
            sampler.sample(self.X, self.y, TRUE_BETA)

        lines = [call.args[0] for call in fake_print.call_args_list]
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith("[MH] iter=10, acceptance="))

    def test_second_run_is_refused(self) -> None:
        sampler = self._run(n_samples=5)
        with self.assertRaises(RuntimeError):
            sampler.sample(self.X, self.y, TRUE_BETA)


class TestSamplerValidation(unittest.TestCase):
    def setUp(self) -> None:
        self.X, self.y = make_logistic_data(n_rows=10)

    def test_row_mismatch_raises_before_sampling(self) -> None:
        calls = []
        sampler = MetropolisHastingsSampler(n_samples=100, random_state=0)

        with self.assertRaisesRegex(ValueError, "9 rows but y has 10"):
            sampler.sample(self.X[:9], self.y, TRUE_BETA, should_stop=lambda: calls.append(1))

        self.assertEqual(calls, [])
        self.assertEqual(sampler.state_, SamplerState.INITIALIZING)
        self.assertIsNone(sampler.chain_)

    def test_short_chain_raises(self) -> None:
        with self.assertRaises(ValueError):
            MetropolisHastingsSampler(n_samples=1).sample(self.X, self.y, TRUE_BETA)

    def test_initial_vector_length_reports_expected(self) -> None:
        with self.assertRaisesRegex(ValueError, "length 3"):
            MetropolisHastingsSampler(n_samples=5).sample(self.X, self.y, TRUE_BETA[:2])

    def test_non_binary_response_raises(self) -> None:
        y = self.y.copy()
        y[0] = 2
        with self.assertRaises(ValueError):
            MetropolisHastingsSampler(n_samples=5).sample(self.X, y, TRUE_BETA)

    def test_bad_supplied_covariance_raises(self) -> None:
        with self.assertRaises(ValueError):
            MetropolisHastingsSampler(n_samples=5).sample(
                self.X, self.y, TRUE_BETA, proposal_cov=np.eye(2)
            )

    def test_non_finite_initial_posterior_is_corruption(self) -> None:
        X = self.X * 1e10
        beta = np.array([0.0, 1e300, 1e300])
        with self.assertRaises(SamplerCorruptionError):
            MetropolisHastingsSampler(n_samples=5).sample(X, self.y, beta)

    def test_results_unavailable_before_run(self) -> None:
        sampler = MetropolisHastingsSampler()
        with self.assertRaisesRegex(RuntimeError, "not been run"):
            sampler.samples_
        with self.assertRaises(RuntimeError):
            sampler.acceptance_rate_


class TestSamplerRecovery(unittest.TestCase):
    def test_posterior_mean_recovers_true_coefficients(self) -> None:
        X, y = make_logistic_data(n_rows=100, seed=2024)
        sampler = MetropolisHastingsSampler(n_samples=5000, random_state=7)
        sampler.sample(X, y, TRUE_BETA)

        kept = sampler.samples_[1000:]
        mean = kept.mean(axis=0)
        std_err = kept.std(axis=0, ddof=1)

        self.assertTrue(np.all(std_err > 0))
        self.assertTrue(
            np.all(np.abs(mean - TRUE_BETA) <= 3 * std_err),
            msg=f"mean={mean}, se={std_err}",
        )
        self.assertTrue(0.05 < sampler.acceptance_rate_ < 0.95)


if __name__ == "__main__":
    unittest.main(verbosity=2)
