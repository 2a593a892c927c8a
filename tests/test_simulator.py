"""Tests for the event queue, the simulation clock and the simulator."""

import os
import sys
import tempfile
import unittest
from unittest import mock

from deliverysim.core.simulator import Simulator
from deliverysim.core.clock import SimulationClock
from deliverysim.core.event_queue import Event, EventType, EventQueue
from deliverysim.core.errors import UnknownTravellerError
from deliverysim.models.activity import TravellerActivity
from deliverysim.main import main
from deliverysim.utils.io import load_json
from deliverysim.utils.visualization import plot_results
from configs import load_default_config


def make_config(**simulation):
    """Build a configuration dictionary with simulation overrides."""
    section = {
        'starting_boxes': 1,
        'starting_travellers': 1,
        'leg_duration': 2.0,
        'dwell_delay': 0.5,
        'start_delay': 0.1,
        'spawn_interval': 1.0,
        'max_time_step': 1.0,
        'time_scale': 1.0,
    }
    section.update(simulation)
    return {
        'simulation': section,
        'layout': {
            'start': [0.0, 0.0],
            'pickup': [100.0, 0.0],
            'delivery': [200.0, 0.0],
        },
    }


class TestEventQueue(unittest.TestCase):
    """Test cases for EventQueue."""

    def test_empty_queue(self):
        """Test empty queue behavior."""
        queue = EventQueue()

        self.assertTrue(queue.is_empty())
        self.assertEqual(queue.size(), 0)
        self.assertIsNone(queue.peek())
        self.assertIsNone(queue.next_time())

    def test_pop_empty_raises(self):
        """Test popping an empty queue raises IndexError."""
        with self.assertRaises(IndexError):
            EventQueue().pop()

    def test_time_ordering(self):
        """Test events come out in increasing time order."""
        queue = EventQueue()

        queue.push(Event(time=3.0, event_type=EventType.SPAWN))
        queue.push(Event(time=1.0, event_type=EventType.SPAWN))
        queue.push(Event(time=2.0, event_type=EventType.SPAWN))

        self.assertEqual([queue.pop().time for _ in range(3)], [1.0, 2.0, 3.0])

    def test_ties_are_fifo(self):
        """Test events sharing a timestamp keep insertion order."""
        queue = EventQueue()

        for name in ['a', 'b', 'c']:
            queue.push(Event(time=1.0, event_type=EventType.START_MOVE, data={'name': name}))
        queue.push(Event(time=0.5, event_type=EventType.SPAWN, data={'name': 'first'}))

        names = [queue.pop().data['name'] for _ in range(4)]
        self.assertEqual(names, ['first', 'a', 'b', 'c'])

    def test_push_assigns_sequence(self):
        """Test the queue stamps increasing sequence numbers."""
        queue = EventQueue()

        first = queue.push(Event(time=2.0, event_type=EventType.SPAWN))
        second = queue.push(Event(time=1.0, event_type=EventType.SPAWN))

        self.assertLess(first.sequence, second.sequence)

    def test_iteration_does_not_consume(self):
        """Test iterating lists events in processing order and keeps them."""
        queue = EventQueue()
        queue.push(Event(time=2.0, event_type=EventType.SPAWN))
        queue.push(Event(time=1.0, event_type=EventType.START_MOVE))
        queue.push(Event(time=2.0, event_type=EventType.FINISH_JOURNEY))

        types = [event.event_type for event in queue]

        self.assertEqual(types, [EventType.START_MOVE, EventType.SPAWN, EventType.FINISH_JOURNEY])
        self.assertEqual(len(queue), 3)

    def test_clear(self):
        """Test clearing removes every event."""
        queue = EventQueue()
        queue.push(Event(time=1.0, event_type=EventType.SPAWN))
        queue.clear()

        self.assertTrue(queue.is_empty())
        self.assertIsNone(queue.next_time())

    def test_negative_time_rejected(self):
        """Test events cannot be created with negative time."""
        with self.assertRaises(ValueError):
            Event(time=-1.0, event_type=EventType.SPAWN)


class TestSimulationClock(unittest.TestCase):
    """Test cases for SimulationClock."""

    def setUp(self):
        """Set up test fixtures."""
        self.clock = SimulationClock()
        self.processed = []
        self.issues = []
        self.clock.add_issue_listener(self.issues.append)

    def _record(self, name):
        def handler(event):
            self.processed.append((name, self.clock.current_time))
        return handler

    def test_processes_events_in_order(self):
        """Test ties keep scheduling order and the clock ends at the target."""
        self.clock.schedule_event(3.0, EventType.SPAWN, handler=self._record('A'))
        self.clock.schedule_event(3.0, EventType.SPAWN, handler=self._record('B'))
        self.clock.schedule_event(5.0, EventType.SPAWN, handler=self._record('C'))
        self.clock.schedule_event(8.0, EventType.SPAWN, handler=self._record('D'))

        processed = self.clock.advance_simulation(10.0)

        self.assertEqual(processed, 4)
        self.assertEqual(self.processed, [('A', 3.0), ('B', 3.0), ('C', 5.0), ('D', 8.0)])
        self.assertEqual(self.clock.current_time, 10.0)
        self.assertEqual(self.clock.pending_count, 0)

    def test_events_beyond_target_stay_pending(self):
        """Test only due events are drained."""
        self.clock.schedule_event(2.0, EventType.SPAWN, handler=self._record('early'))
        self.clock.schedule_event(7.0, EventType.SPAWN, handler=self._record('late'))

        self.clock.advance_simulation(5.0)

        self.assertEqual([name for name, _ in self.processed], ['early'])
        self.assertEqual(self.clock.current_time, 5.0)
        self.assertEqual(self.clock.next_event_time, 7.0)

    def test_handler_scheduled_events_join_drain(self):
        """Test events scheduled by handlers are processed in the same advance."""
        def chain(event):
            self.processed.append(('first', self.clock.current_time))
            self.clock.schedule_event(self.clock.current_time, EventType.START_MOVE,
                                      handler=self._record('same_time'))
            self.clock.schedule_event(self.clock.current_time + 1.0, EventType.START_MOVE,
                                      handler=self._record('later'))

        self.clock.schedule_event(1.0, EventType.SPAWN, handler=chain)
        self.clock.schedule_event(1.0, EventType.SPAWN, handler=self._record('second'))

        self.clock.advance_simulation(5.0)

        self.assertEqual(self.processed, [
            ('first', 1.0), ('second', 1.0), ('same_time', 1.0), ('later', 2.0),
        ])

    def test_large_step_skips_nothing(self):
        """Test one huge advance still visits every event."""
        for t in range(100):
            self.clock.schedule_event(float(t), EventType.SPAWN, handler=self._record(t))

        self.clock.advance_simulation(1e6)

        self.assertEqual([name for name, _ in self.processed], list(range(100)))

    def test_time_is_monotonic(self):
        """Test current time never decreases across advances."""
        self.clock.schedule_event(0.7, EventType.SPAWN)
        self.clock.schedule_event(2.2, EventType.SPAWN)
        times = [self.clock.current_time]
        for delta in [0.3, 0.0, 1.5, 0.25, 4.0, 0.0]:
            self.clock.advance_simulation(delta)
            times.append(self.clock.current_time)

        self.assertEqual(times, sorted(times))

    def test_time_listeners(self):
        """Test time notifications for event slots and the final free-run."""
        seen = []
        self.clock.add_time_listener(seen.append)
        self.clock.schedule_event(3.0, EventType.SPAWN)
        self.clock.schedule_event(3.0, EventType.SPAWN)
        self.clock.schedule_event(5.0, EventType.SPAWN)

        self.clock.advance_simulation(10.0)

        self.assertEqual(seen, [3.0, 5.0, 10.0])

    def test_time_listeners_see_slot_at_current_time(self):
        """Test a slot at the current time is announced before it is drained."""
        seen = []
        self.clock.add_time_listener(seen.append)
        self.clock.schedule_event(0.0, EventType.SPAWN, handler=self._record('a'))
        self.clock.schedule_event(0.0, EventType.SPAWN, handler=self._record('b'))

        processed = self.clock.advance_simulation(0.0)

        self.assertEqual(processed, 2)
        self.assertEqual(seen, [0.0])

    def test_get_scheduled_events(self):
        """Test pending events are listed in processing order without being consumed."""
        self.clock.schedule_event(4.0, EventType.FINISH_JOURNEY, data={'name': 'late'})
        self.clock.schedule_event(2.0, EventType.SPAWN, data={'name': 'first'})
        self.clock.schedule_event(2.0, EventType.START_MOVE, data={'name': 'second'})
        self.clock.schedule_event(3.0, EventType.REACH_WAYPOINT, data={'name': 'middle'})

        names = [event.data['name'] for event in self.clock.get_scheduled_events()]

        self.assertEqual(names, ['first', 'second', 'middle', 'late'])
        self.assertEqual(self.clock.pending_count, 4)
        self.assertEqual(self.clock.next_event_time, 2.0)

    def test_past_schedule_is_rejected(self):
        """Test scheduling in the past is a logged no-op."""
        self.clock.advance_simulation(5.0)

        self.clock.schedule_event(3.0, EventType.SPAWN, handler=self._record('past'))

        self.assertEqual(self.clock.pending_count, 0)
        self.assertEqual(len(self.issues), 1)
        self.assertEqual(self.issues[0].kind, 'past_schedule')
        self.assertEqual(self.issues[0].time, 5.0)

    def test_negative_delta_rejected(self):
        """Test advancing by a negative delta raises ValueError."""
        with self.assertRaises(ValueError):
            self.clock.advance_simulation(-1.0)

    def test_reentrant_advance_rejected(self):
        """Test a handler cannot advance the clock."""
        def reenter(event):
            self.clock.advance_simulation(1.0)

        self.clock.schedule_event(1.0, EventType.SPAWN, handler=reenter)

        with self.assertRaises(RuntimeError):
            self.clock.advance_simulation(2.0)

    def test_simulation_errors_are_reported(self):
        """Test recoverable handler errors become issues and the drain continues."""
        def stale(event):
            raise UnknownTravellerError("traveller 7 is gone")

        seen = []
        self.clock.add_event_listener(seen.append)
        self.clock.schedule_event(1.0, EventType.START_MOVE, handler=stale)
        self.clock.schedule_event(2.0, EventType.SPAWN, handler=self._record('after'))

        self.clock.advance_simulation(3.0)

        self.assertEqual([issue.kind for issue in self.issues], ['unknown_traveller'])
        self.assertEqual(self.processed, [('after', 2.0)])
        self.assertEqual([event.event_type for event in seen], [EventType.SPAWN])

    def test_other_errors_propagate(self):
        """Test programming errors in handlers are not swallowed."""
        def broken(event):
            raise KeyError("missing")

        self.clock.schedule_event(1.0, EventType.SPAWN, handler=broken)

        with self.assertRaises(KeyError):
            self.clock.advance_simulation(2.0)

    def test_tick_scales_and_clamps(self):
        """Test ticks scale wall time and clamp to the maximum step."""
        self.assertAlmostEqual(self.clock.tick(0.5), 0.5)

        self.clock.time_scale = 1000.0
        self.assertEqual(self.clock.tick(1.0 / 60.0), 1.0)
        self.assertAlmostEqual(self.clock.current_time, 1.5)

    def test_paused_ticks_do_nothing(self):
        """Test ticks never advance or drain while paused."""
        self.clock.schedule_event(0.1, EventType.SPAWN, handler=self._record('x'))

        self.clock.time_scale = 0.0
        for _ in range(10):
            self.clock.tick(1.0)
        self.clock.time_scale = 1.0
        self.clock.is_running = False
        for _ in range(10):
            self.clock.tick(1.0)

        self.assertEqual(self.clock.current_time, 0.0)
        self.assertEqual(self.clock.pending_count, 1)
        self.assertEqual(self.processed, [])

    def test_fast_forward(self):
        """Test fast forward drains every pending event."""
        self.clock.schedule_event(1500.0, EventType.SPAWN, handler=self._record('far'))
        self.clock.schedule_event(10.0, EventType.SPAWN, handler=self._record('near'))

        self.clock.fast_forward()

        self.assertEqual([name for name, _ in self.processed], ['near', 'far'])
        self.assertEqual(self.clock.pending_count, 0)

    def test_reset(self):
        """Test reset clears the queue and rewinds time but keeps speed settings."""
        self.clock.time_scale = 4.0
        self.clock.schedule_event(10.0, EventType.SPAWN)
        self.clock.advance_simulation(3.0)

        self.clock.reset()

        self.assertEqual(self.clock.current_time, 0.0)
        self.assertEqual(self.clock.pending_count, 0)
        self.assertEqual(self.clock.time_scale, 4.0)
        self.assertTrue(self.clock.is_running)

    def test_format_time(self):
        """Test HH:MM:SS formatting."""
        self.clock.advance_simulation(3725.0)
        self.assertEqual(self.clock.format_time(), "01:02:05")


class TestSimulator(unittest.TestCase):
    """Test cases for Simulator."""

    def run_to_completion(self, simulator, tick_seconds=0.05):
        results = simulator.run_until_complete(tick_seconds=tick_seconds)
        self.assertTrue(results['is_complete'])
        return results

    def assert_contiguous(self, info):
        timeline = info['timeline']
        for previous, following in zip(timeline, timeline[1:]):
            self.assertEqual(previous['end_time'], following['start_time'])
            self.assertLessEqual(previous['start_time'], previous['end_time'])

    def test_simulator_initialization(self):
        """Test simulator initialization."""
        simulator = Simulator(make_config(starting_boxes=4, starting_travellers=2))

        self.assertEqual(simulator.total_boxes, 4)
        self.assertEqual(simulator.box_pool.count, 4)
        self.assertEqual(simulator.current_time, 0.0)
        self.assertEqual(simulator.clock.pending_count, 2)
        self.assertFalse(simulator.is_complete)

    def test_default_config_runs(self):
        """Test the shipped default configuration delivers every box."""
        simulator = Simulator(load_default_config())
        simulator.max_speed()

        results = simulator.run_until_complete()

        self.assertTrue(results['is_complete'])
        self.assertEqual(results['delivered_boxes'], 10)

    def test_single_cycle(self):
        """Test one traveller delivering one box."""
        simulator = Simulator(make_config())

        results = self.run_to_completion(simulator)

        [info] = simulator.get_traveller_timelines()
        activities = [segment['activity'] for segment in info['timeline']]
        durations = [segment['end_time'] - segment['start_time'] for segment in info['timeline']]

        self.assertEqual(activities, [
            'Starting', 'MovingToPickup', 'PickingUp', 'MovingToDelivery', 'Delivering',
        ])
        for actual, expected in zip(durations, [0.1, 2.0, 0.5, 2.0, 0.5]):
            self.assertAlmostEqual(actual, expected)

        self.assertEqual(info['current_activity'], 'Finished')
        self.assertAlmostEqual(results['completion_time'], 5.1)
        moving_start = info['timeline'][1]['start_time']
        self.assertAlmostEqual(results['completion_time'] - moving_start, 5.0)

    def test_multi_cycle(self):
        """Test one traveller loops once per box, returning between cycles."""
        simulator = Simulator(make_config(starting_boxes=3))

        results = self.run_to_completion(simulator)

        [info] = simulator.get_traveller_timelines()
        activities = [segment['activity'] for segment in info['timeline']]

        self.assertEqual(activities.count('MovingToPickup'), 3)
        self.assertEqual(activities.count('Delivering'), 3)
        self.assertEqual(activities.count('Returning'), 2)
        self.assertEqual(len(activities), 15)
        # start delay + 3 cycles + 2 returns
        self.assertAlmostEqual(results['completion_time'], 0.1 + 3 * 5.0 + 2 * 0.5)
        self.assert_contiguous(info)

    def test_conservation_with_several_travellers(self):
        """Test every box is delivered exactly once and nobody is left carrying."""
        simulator = Simulator(make_config(starting_boxes=10, starting_travellers=3))

        self.run_to_completion(simulator)

        self.assertEqual(simulator.delivered_count, 10)
        self.assertEqual(simulator.box_pool.count, 0)
        self.assertEqual(len(simulator.active_travellers), 0)
        self.assertEqual(sorted(box.box_id for box in simulator.delivered_boxes), list(range(10)))
        finished = simulator.traveller_manager.finished
        self.assertEqual(sum(t.boxes_delivered for t in finished), 10)
        results = simulator.get_results()
        self.assertEqual(sum(results['deliveries_per_traveller'].values()), 10)
        self.assertEqual(results['deliveries_per_traveller'],
                         {t.traveller_id: t.boxes_delivered for t in finished})
        self.assertLessEqual(results['min_deliveries_per_traveller'],
                             results['max_deliveries_per_traveller'])
        self.assertTrue(all(not t.has_box and t.carried_box_id is None for t in finished))
        self.assertEqual(simulator.issues, [])

    def test_timelines_are_contiguous(self):
        """Test every traveller's segments chain without gaps while running."""
        simulator = Simulator(make_config(starting_boxes=6, starting_travellers=2))

        for _ in range(150):
            simulator.tick(0.05)
            for info in simulator.get_traveller_timelines():
                self.assert_contiguous(info)

        for traveller in simulator.active_travellers.values():
            segments = traveller.timeline.segments
            self.assertTrue(all(not s.is_open for s in segments[:-1]))
            self.assertTrue(segments[-1].is_open)

    def test_finished_travellers_have_no_open_segment(self):
        """Test the final segment is closed once a traveller finishes."""
        simulator = Simulator(make_config(starting_boxes=2, starting_travellers=2))

        self.run_to_completion(simulator)

        for traveller in simulator.traveller_manager.finished:
            self.assertEqual(traveller.activity, TravellerActivity.FINISHED)
            self.assertIsNone(traveller.timeline.current)

    def test_determinism(self):
        """Test identical configuration and tick timing give identical timelines."""
        def run():
            simulator = Simulator(make_config(starting_boxes=7, starting_travellers=3))
            for step in range(400):
                simulator.tick(0.03 if step % 2 else 0.07)
                if step == 50:
                    simulator.spawn_traveller()
            return simulator.get_traveller_timelines()

        self.assertEqual(run(), run())

    def test_pause_and_resume(self):
        """Test pausing freezes time and resuming restores the previous speed."""
        simulator = Simulator(make_config(time_scale=2.0))
        simulator.tick(0.5)
        paused_at = simulator.current_time
        pending = simulator.clock.pending_count

        simulator.pause()
        for _ in range(20):
            simulator.tick(0.5)

        self.assertEqual(simulator.current_time, paused_at)
        self.assertEqual(simulator.clock.pending_count, pending)

        simulator.set_time_scale(3.0)
        self.assertEqual(simulator.clock.time_scale, 0.0)

        self.assertTrue(simulator.toggle())
        self.assertEqual(simulator.clock.time_scale, 3.0)
        simulator.tick(0.1)
        self.assertAlmostEqual(simulator.current_time, paused_at + 0.3)

    def test_run_while_paused_raises(self):
        """Test run_until_complete refuses to spin on a paused simulation."""
        simulator = Simulator(make_config())
        simulator.pause()

        with self.assertRaises(RuntimeError):
            simulator.run_until_complete()

    def test_max_speed_clamps_each_tick(self):
        """Test max speed advances at most one max step per tick."""
        simulator = Simulator(make_config(starting_boxes=5))
        simulator.max_speed()

        simulator.tick(1.0)

        self.assertEqual(simulator.clock.time_scale, Simulator.MAX_SPEED)
        self.assertAlmostEqual(simulator.current_time, 1.0)

    def test_spawn_command(self):
        """Test an external spawn request adds a traveller at the current time."""
        simulator = Simulator(make_config(starting_boxes=4))
        simulator.tick(0.05)

        simulator.spawn_traveller()
        simulator.tick(0.05)

        timelines = simulator.get_traveller_timelines()
        self.assertEqual([info['id'] for info in timelines], [0, 1])
        self.assertAlmostEqual(timelines[1]['timeline'][0]['start_time'], 0.05)

    def test_spawn_refused_without_boxes(self):
        """Test travellers are not spawned once every box is claimed."""
        simulator = Simulator(make_config(starting_boxes=1, starting_travellers=3))

        self.run_to_completion(simulator)

        self.assertEqual(len(simulator.get_traveller_timelines()), 1)
        self.assertEqual(simulator.delivered_count, 1)

    def test_spawn_refused_after_completion(self):
        """Test spawning after completion is ignored."""
        simulator = Simulator(make_config())
        self.run_to_completion(simulator)

        simulator.spawn_traveller()
        simulator.resume()
        simulator.tick(0.1)

        self.assertEqual(len(simulator.get_traveller_timelines()), 1)
        self.assertTrue(simulator.is_complete)

    def test_completion_stops_clock(self):
        """Test the clock stops running once the simulation is complete."""
        simulator = Simulator(make_config())

        self.run_to_completion(simulator)
        stopped_at = simulator.current_time
        simulator.tick(1.0)

        self.assertFalse(simulator.is_running)
        self.assertEqual(simulator.current_time, stopped_at)

    def test_unknown_traveller_is_skipped(self):
        """Test events of a traveller removed behind the simulator's back have no effect."""
        simulator = Simulator(make_config(starting_boxes=2))
        simulator.tick(0.05)
        traveller = simulator.active_travellers[0]

        simulator.traveller_manager.travellers.clear()
        simulator.tick(0.1)

        self.assertEqual(traveller.activity, TravellerActivity.STARTING)
        self.assertEqual(len(traveller.timeline), 1)
        self.assertEqual([issue.kind for issue in simulator.issues], ['unknown_traveller'])

    def test_stale_traveller_after_reset(self):
        """Test a traveller from before a reset cannot act on its reused id."""
        simulator = Simulator(make_config(starting_boxes=2))
        simulator.tick(0.05)
        stale = simulator.active_travellers[0]

        simulator.reset()
        stale._schedule(0.0, EventType.START_MOVE, stale._on_start_move)
        simulator.tick(0.05)

        fresh = simulator.active_travellers[0]
        self.assertIsNot(fresh, stale)
        self.assertEqual(stale.activity, TravellerActivity.STARTING)
        self.assertEqual([issue.kind for issue in simulator.issues], ['unknown_traveller'])

    def test_reset_mid_run(self):
        """Test reset restores a fresh simulation with a new configuration."""
        simulator = Simulator(make_config(starting_boxes=3))
        for _ in range(100):
            simulator.tick(0.05)
        self.assertGreater(simulator.current_time, 0.0)

        simulator.reset(make_config(starting_boxes=2, starting_travellers=2))

        self.assertEqual(simulator.current_time, 0.0)
        self.assertEqual(simulator.total_boxes, 2)
        self.assertEqual(simulator.box_pool.count, 2)
        self.assertEqual(simulator.delivered_count, 0)
        self.assertEqual(simulator.get_traveller_timelines(), [])
        self.assertEqual(simulator.clock.pending_count, 2)

        self.run_to_completion(simulator)
        self.assertEqual(simulator.delivered_count, 2)

    def test_open_segment_reports_current_time(self):
        """Test the read accessor substitutes current time for an ongoing segment."""
        simulator = Simulator(make_config())
        for _ in range(10):
            simulator.tick(0.1)

        [info] = simulator.get_traveller_timelines()

        self.assertEqual(info['current_activity'], 'MovingToPickup')
        self.assertAlmostEqual(info['timeline'][-1]['end_time'], simulator.current_time)
        self.assertIsNone(simulator.active_travellers[0].timeline.current.end_time)

    def test_results(self):
        """Test results contain counters and metrics."""
        simulator = Simulator(make_config(starting_boxes=3))

        results = self.run_to_completion(simulator)

        self.assertEqual(results['total_boxes'], 3)
        self.assertEqual(results['delivered_boxes'], 3)
        self.assertEqual(results['completion_rate'], 1.0)
        self.assertEqual(results['num_travellers'], 1)
        self.assertAlmostEqual(results['makespan'], 16.1)
        self.assertAlmostEqual(results['throughput'], 3 / 16.1)
        self.assertAlmostEqual(results['total_MovingToPickup'], 6.0)
        self.assertAlmostEqual(results['mean_PickingUp'], 0.5)
        self.assertAlmostEqual(results['mean_delivery_interval'], 5.5)
        self.assertGreater(results['mean_utilization'], 0.99)
        self.assertEqual(results['deliveries_per_traveller'], {0: 3})
        self.assertEqual(results['min_deliveries_per_traveller'], 3)
        self.assertEqual(results['max_deliveries_per_traveller'], 3)

    def test_empty_simulation_is_complete(self):
        """Test a run with no boxes and no travellers completes immediately."""
        simulator = Simulator(make_config(starting_boxes=0, starting_travellers=0))

        simulator.tick(0.1)

        self.assertTrue(simulator.is_complete)
        self.assertEqual(simulator.completion_time, 0.1)

    def test_invalid_config(self):
        """Test invalid configuration is rejected at construction."""
        with self.assertRaises(ValueError):
            Simulator(make_config(leg_duration=0.0))
        with self.assertRaises(ValueError):
            Simulator(make_config(dwell_delay=-0.5))


class TestOutputs(unittest.TestCase):
    """Test cases for plots and exports of a finished run."""

    def test_plot_results(self):
        """Test the Gantt chart and activity breakdown are written."""
        simulator = Simulator(make_config(starting_boxes=3, starting_travellers=2))
        results = simulator.run_until_complete(tick_seconds=0.1)

        with tempfile.TemporaryDirectory() as tmpdir:
            plot_results(results, simulator.get_traveller_timelines(), tmpdir)

            self.assertTrue(os.path.exists(os.path.join(tmpdir, "gantt_chart.png")))
            self.assertTrue(os.path.exists(os.path.join(tmpdir, "activity_breakdown.png")))

    def test_cli_writes_results_and_timelines(self):
        """Test the command line run saves results and JSON timelines."""
        with tempfile.TemporaryDirectory() as tmpdir:
            argv = ['deliverysim', '--boxes', '2', '--time-scale', '100', '--output-dir', tmpdir]
            with mock.patch.object(sys, 'argv', argv):
                status = main()

            self.assertEqual(status, 0)
            self.assertTrue(os.path.exists(os.path.join(tmpdir, "results.yaml")))
            timelines = load_json(os.path.join(tmpdir, "timelines.json"))

        self.assertEqual(len(timelines), 1)
        self.assertEqual(timelines[0]['name'], 'Alex')
        self.assertEqual(timelines[0]['current_activity'], 'Finished')


if __name__ == '__main__':
    unittest.main()
