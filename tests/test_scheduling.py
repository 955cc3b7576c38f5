"""Tests for selection policies, the starvation heuristic and workload."""

import unittest

from schedsim.models.process import Process, ProcessState
from schedsim.models.telemetry import DecisionAction
from schedsim.scheduling.policies import (
    Algorithm, PriorityPolicy, RoundRobinPolicy, create_policy
)
from schedsim.scheduling.starvation import StarvationDetector
from schedsim.workload.process_generator import ProcessGenerator
from schedsim.utils.random_source import RandomSource

from helpers import ScriptedRandomSource


def make_process(pid, priority=5, state=ProcessState.READY, wait=0, cpu=0,
                 remaining=10, boosted=False):
    process = Process(
        pid=pid,
        name=f"Process-{pid}",
        priority=priority + (5 if boosted else 0),
        base_priority=priority,
        arrival_time=0,
        burst_time=remaining,
        remaining_time=remaining,
        color="hsl(0, 70%, 50%)",
        state=state,
        wait_time=wait,
        cpu_usage=cpu,
    )
    process.boosted = boosted
    process.is_starving = boosted
    return process


class TestAlgorithm(unittest.TestCase):
    """Test cases for Algorithm name resolution."""

    def test_canonical_names(self):
        self.assertIs(Algorithm.from_name("round-robin"), Algorithm.ROUND_ROBIN)
        self.assertIs(Algorithm.from_name("static-priority"), Algorithm.STATIC_PRIORITY)
        self.assertIs(Algorithm.from_name("ai-boost-dynamic-priority"), Algorithm.AI_BOOST)

    def test_aliases_and_case(self):
        self.assertIs(Algorithm.from_name("RR"), Algorithm.ROUND_ROBIN)
        self.assertIs(Algorithm.from_name(" priority "), Algorithm.STATIC_PRIORITY)
        self.assertIs(Algorithm.from_name("ai-boost"), Algorithm.AI_BOOST)
        self.assertIs(Algorithm.from_name(Algorithm.AI_BOOST), Algorithm.AI_BOOST)

    def test_unknown_name(self):
        with self.assertRaises(ValueError):
            Algorithm.from_name("lottery")

    def test_only_ai_mode_uses_heuristic(self):
        self.assertTrue(Algorithm.AI_BOOST.uses_starvation_heuristic)
        self.assertFalse(Algorithm.ROUND_ROBIN.uses_starvation_heuristic)
        self.assertFalse(Algorithm.STATIC_PRIORITY.uses_starvation_heuristic)

    def test_create_policy(self):
        self.assertIsInstance(create_policy(Algorithm.STATIC_PRIORITY), PriorityPolicy)
        self.assertIsInstance(create_policy(Algorithm.AI_BOOST), PriorityPolicy)
        policy = create_policy(Algorithm.ROUND_ROBIN, {'time_quantum': 4})
        self.assertIsInstance(policy, RoundRobinPolicy)
        self.assertEqual(policy.quantum, 4)


class TestPriorityPolicy(unittest.TestCase):
    """Test cases for PriorityPolicy."""

    def test_picks_highest_priority(self):
        processes = [make_process(1, 3), make_process(2, 8), make_process(3, 5)]
        self.assertEqual(PriorityPolicy().select(processes).pid, 2)

    def test_first_encountered_wins_ties(self):
        processes = [make_process(1, 3), make_process(2, 8), make_process(3, 8)]
        self.assertEqual(PriorityPolicy().select(processes).pid, 2)

    def test_ignores_non_candidates(self):
        processes = [
            make_process(1, 10, state=ProcessState.TERMINATED, remaining=0),
            make_process(2, 9, state=ProcessState.WAITING),
            make_process(3, 1, state=ProcessState.RUNNING),
        ]
        self.assertEqual(PriorityPolicy().select(processes).pid, 3)

    def test_no_candidates(self):
        processes = [make_process(1, state=ProcessState.TERMINATED, remaining=0)]
        self.assertIsNone(PriorityPolicy().select(processes))
        self.assertIsNone(PriorityPolicy().select([]))


class TestRoundRobinPolicy(unittest.TestCase):
    """Test cases for RoundRobinPolicy."""

    def _run(self, policy, processes, ticks):
        order = []
        for _ in range(ticks):
            winner = policy.select(processes)
            for p in processes:
                if p.state == ProcessState.RUNNING and p is not winner:
                    p.state = ProcessState.READY
            winner.state = ProcessState.RUNNING
            order.append(winner.pid)
        return order

    def test_rotation(self):
        processes = [make_process(1), make_process(2), make_process(3)]
        order = self._run(RoundRobinPolicy(quantum=2), processes, 7)
        self.assertEqual(order, [1, 1, 2, 2, 3, 3, 1])

    def test_newly_ready_process_joins_the_back(self):
        processes = [make_process(1), make_process(2, state=ProcessState.TERMINATED, remaining=0)]
        policy = RoundRobinPolicy(quantum=1)

        self.assertEqual(self._run(policy, processes, 2), [1, 1])

        processes[1].state = ProcessState.READY
        self.assertEqual(self._run(policy, processes, 3), [2, 1, 2])

    def test_terminated_process_leaves_queue(self):
        processes = [make_process(1), make_process(2)]
        policy = RoundRobinPolicy(quantum=3)

        self.assertEqual(self._run(policy, processes, 1), [1])
        processes[0].state = ProcessState.TERMINATED
        self.assertEqual(self._run(policy, processes, 2), [2, 2])

    def test_invalid_quantum(self):
        with self.assertRaises(ValueError):
            RoundRobinPolicy(quantum=0)


class TestStarvationDetector(unittest.TestCase):
    """Test cases for StarvationDetector."""

    def setUp(self):
        self.detector = StarvationDetector({})

    def test_boost_above_threshold(self):
        process = make_process(1, priority=1, wait=5, cpu=0)
        decisions = self.detector.evaluate([process], timestamp=1234)

        self.assertEqual(len(decisions), 1)
        decision = decisions[0]
        self.assertEqual(decision.action, DecisionAction.BOOST)
        self.assertEqual(decision.id, "dec-1234-1")
        self.assertEqual(decision.process_name, "Process-1")
        self.assertEqual(decision.features.wait_ratio, 0.83)
        self.assertEqual(decision.features.age, 5)
        self.assertEqual(process.priority, 6)
        self.assertTrue(process.boosted)
        self.assertTrue(process.is_starving)

    def test_ratio_at_threshold_does_not_boost(self):
        process = make_process(1, priority=1, wait=4, cpu=0)
        self.assertEqual(self.detector.evaluate([process], 0), [])
        self.assertEqual(process.priority, 1)

    def test_no_stacking(self):
        process = make_process(1, priority=1, wait=20, cpu=0)
        self.detector.evaluate([process], 0)
        self.assertEqual(self.detector.evaluate([process], 0), [])
        self.assertEqual(process.priority, 6)
        self.assertEqual(self.detector.total_boosts, 1)

    def test_priority_ceiling(self):
        process = make_process(1, priority=15, wait=20, cpu=0)
        self.assertEqual(self.detector.evaluate([process], 0), [])
        self.assertFalse(process.boosted)

    def test_normalize_below_threshold(self):
        process = make_process(1, priority=2, wait=5, cpu=20, boosted=True)
        decisions = self.detector.evaluate([process], 0)

        self.assertEqual([d.action for d in decisions], [DecisionAction.NORMALIZE])
        self.assertEqual(decisions[0].confidence, 0.88)
        self.assertEqual(decisions[0].features.wait_ratio, 0.19)
        self.assertEqual(process.priority, 2)
        self.assertFalse(process.boosted)
        self.assertFalse(process.is_starving)

    def test_boosted_in_between_thresholds_is_left_alone(self):
        process = make_process(1, priority=2, wait=5, cpu=5, boosted=True)
        self.assertEqual(self.detector.evaluate([process], 0), [])
        self.assertEqual(process.priority, 7)

    def test_terminated_processes_are_skipped(self):
        process = make_process(1, priority=1, wait=20, state=ProcessState.TERMINATED,
                               remaining=0)
        self.assertEqual(self.detector.evaluate([process], 0), [])

    def test_one_decision_per_process(self):
        processes = [
            make_process(1, priority=1, wait=10),
            make_process(2, priority=10, cpu=10),
            make_process(3, priority=3, wait=9),
        ]
        decisions = self.detector.evaluate(processes, 0)
        self.assertEqual([d.pid for d in decisions], [1, 3])

    def test_configured_thresholds(self):
        detector = StarvationDetector({'boost_threshold': 0.5, 'boost_amount': 2})
        process = make_process(1, priority=4, wait=2, cpu=0)
        detector.evaluate([process], 0)
        self.assertEqual(process.priority, 6)

    def test_invalid_thresholds(self):
        with self.assertRaises(ValueError):
            StarvationDetector({'boost_threshold': 0.3, 'normalize_threshold': 0.5})

    def test_decision_serialization(self):
        process = make_process(1, priority=1, wait=5)
        payload = self.detector.evaluate([process], 99)[0].to_dict(encode_json=True)

        self.assertEqual(payload['action'], 'boost')
        self.assertEqual(payload['processName'], 'Process-1')
        self.assertEqual(payload['features']['queuePosition'], 0)


class TestProcessGenerator(unittest.TestCase):
    """Test cases for ProcessGenerator."""

    def test_ranges(self):
        generator = ProcessGenerator({}, RandomSource(seed=42))
        processes = generator.generate(20, timestamp=0)

        for _ in range(10):
            processes += generator.generate(20, timestamp=0)

        for process in processes:
            self.assertGreaterEqual(process.priority, 1)
            self.assertLessEqual(process.priority, 10)
            self.assertEqual(process.priority, process.base_priority)
            self.assertGreaterEqual(process.burst_time, 5)
            self.assertLess(process.burst_time, 25)
            self.assertEqual(process.remaining_time, process.burst_time)
            self.assertTrue(process.color.startswith("hsl("))

    def test_pids_and_names(self):
        generator = ProcessGenerator({'pid_base': 500}, ScriptedRandomSource())
        processes = generator.generate(3, timestamp=42)

        self.assertEqual([p.pid for p in processes], [500, 501, 502])
        self.assertEqual(processes[2].name, "Process-502")
        self.assertEqual(processes[0].arrival_time, 42)

    def test_respawn_keeps_identity(self):
        generator = ProcessGenerator({}, ScriptedRandomSource(ints=[4, 6, 18]))
        process = generator.generate(1, timestamp=0)[0]
        color = process.color

        process.state = ProcessState.RUNNING
        process.priority = 9
        process.boosted = True
        process.is_starving = True
        process.wait_time = 12
        process.cpu_usage = 6
        process.terminate()

        generator.respawn(process, timestamp=5000)

        self.assertEqual(process.pid, 1000)
        self.assertEqual(process.name, "Process-1000")
        self.assertEqual(process.color, color)
        self.assertEqual(process.state, ProcessState.READY)
        self.assertEqual(process.priority, 4)
        self.assertEqual(process.base_priority, 4)
        self.assertEqual(process.burst_time, 18)
        self.assertEqual(process.remaining_time, 18)
        self.assertEqual(process.wait_time, 0)
        self.assertEqual(process.cpu_usage, 0)
        self.assertEqual(process.turnaround_time, 0)
        self.assertFalse(process.boosted)
        self.assertFalse(process.is_starving)
        self.assertEqual(process.arrival_time, 5000)

    def test_invalid_ranges(self):
        with self.assertRaises(ValueError):
            ProcessGenerator({'min_priority': 5, 'max_priority': 1})
        with self.assertRaises(ValueError):
            ProcessGenerator({'min_burst': 10, 'max_burst': 10})


class TestProcess(unittest.TestCase):
    """Test cases for Process transitions."""

    def test_run_until_terminated(self):
        process = make_process(1, remaining=2, state=ProcessState.RUNNING)

        self.assertFalse(process.run_for_tick())
        self.assertTrue(process.run_for_tick())
        self.assertEqual(process.state, ProcessState.TERMINATED)
        self.assertEqual(process.remaining_time, 0)
        self.assertEqual(process.cpu_usage, 2)
        self.assertEqual(process.turnaround_time, 2)

    def test_wait_ratio(self):
        process = make_process(1, wait=3, cpu=6)
        self.assertAlmostEqual(process.wait_ratio, 0.3)
        self.assertEqual(make_process(2).wait_ratio, 0.0)

    def test_serialization_uses_camel_case(self):
        payload = make_process(1, priority=3, wait=2).to_dict(encode_json=True)

        self.assertEqual(payload['state'], 'ready')
        self.assertEqual(payload['basePriority'], 3)
        self.assertEqual(payload['waitTime'], 2)
        self.assertEqual(payload['turnaroundTime'], 0)
        self.assertFalse(payload['isStarving'])


if __name__ == '__main__':
    unittest.main()
