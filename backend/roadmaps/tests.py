from datetime import date, datetime, timezone

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from .editing import toggle_sub_task, update_task
from .entities import Module, Roadmap, SubTask, Task
from .exceptions import DateOutOfRange, InvalidDate, InvalidTaskChange, SubTaskNotFound, TaskNotFound
from .progress import calculate_progress, set_task_completion
from .scheduler import (
    MS_PER_DAY,
    NOT_SCHEDULED,
    add_time,
    find_task,
    recalculate_total_time,
    reschedule_roadmap,
    task_sequence,
    unschedule_task,
)


def task(task_id, start=None, end=None, **kwargs):
    return Task(
        id=task_id,
        title=task_id.upper(),
        start_date=date.fromisoformat(start) if start else None,
        end_date=date.fromisoformat(end) if end else None,
        **kwargs,
    )


def roadmap(*modules, total=""):
    return Roadmap(
        title="Linear Algebra",
        total_time_estimate=total,
        modules=tuple(Module(id=f"m{i}", title=f"Module {i}", tasks=tuple(tasks))
                      for i, tasks in enumerate(modules, start=1)),
    )


def starts(rm):
    return {pos.task.id: pos.task.start_date for pos in task_sequence(rm.modules)}


class AddTimeTests(TestCase):
    def test_zero_delta_is_identity(self):
        for d in ("2024-03-10", "2023-12-31", "2024-02-29"):
            self.assertEqual(add_time(d, 0), date.fromisoformat(d))

    def test_whole_days_cross_month_boundary(self):
        self.assertEqual(add_time("2024-01-30", 2 * MS_PER_DAY), date(2024, 2, 1))
        self.assertEqual(add_time(date(2024, 3, 1), -1 * MS_PER_DAY), date(2024, 2, 29))

    def test_whole_day_deltas_compose(self):
        start = "2024-01-15"
        for d1, d2 in [(3, -1), (10, 25), (-7, 7), (0, 4)]:
            composed = add_time(add_time(start, d1 * MS_PER_DAY), d2 * MS_PER_DAY)
            self.assertEqual(composed, add_time(start, (d1 + d2) * MS_PER_DAY))

    def test_partial_day_truncates_to_date(self):
        self.assertEqual(add_time("2024-01-01", MS_PER_DAY // 2), date(2024, 1, 1))
        self.assertEqual(add_time("2024-01-01", -1), date(2023, 12, 31))

    def test_time_component_in_input_is_dropped(self):
        self.assertEqual(add_time("2024-01-01T15:30:00", 0), date(2024, 1, 1))

    def test_shift_past_supported_range_raises(self):
        with self.assertRaises(DateOutOfRange):
            add_time(date.max, MS_PER_DAY)
        with self.assertRaises(InvalidDate):
            add_time("0001-01-01", -MS_PER_DAY)

    def test_empty_date_is_noop(self):
        self.assertIsNone(add_time("", MS_PER_DAY))
        self.assertIsNone(add_time(None, MS_PER_DAY))

    def test_malformed_date_raises(self):
        for bad in ("2024-13-40", "not a date", 20240101, "20240101", "2024-W01-1", "2024-1-5"):
            with self.assertRaises(InvalidDate):
                add_time(bad, MS_PER_DAY)


class TotalTimeTests(TestCase):
    def test_nothing_scheduled(self):
        self.assertEqual(recalculate_total_time(()), NOT_SCHEDULED)
        rm = roadmap([task("a"), task("b")], [])
        self.assertEqual(recalculate_total_time(rm.modules), NOT_SCHEDULED)

    def test_single_task_counts_one_day(self):
        rm = roadmap([task("a", "2024-01-01")])
        self.assertEqual(recalculate_total_time(rm.modules), "1 days")

    def test_span_uses_end_dates(self):
        rm = roadmap([task("a", "2024-01-01", "2024-01-10"), task("b", "2024-01-03")])
        self.assertEqual(recalculate_total_time(rm.modules), "10 days")

    def test_end_date_without_start_still_extends_span(self):
        rm = roadmap([task("a", "2024-01-01"), task("b", end="2024-01-05")])
        self.assertEqual(recalculate_total_time(rm.modules), "5 days")

    def test_thirty_days_stays_in_days(self):
        rm = roadmap([task("a", "2024-01-01", "2024-01-30")])
        self.assertEqual(recalculate_total_time(rm.modules), "30 days")

    def test_longer_spans_round_to_weeks(self):
        rm = roadmap([task("a", "2024-01-01", "2024-01-31")])
        self.assertEqual(recalculate_total_time(rm.modules), "4 weeks")
        rm = roadmap([task("a", "2024-01-01")], [task("b", "2024-02-20", "2024-03-01")])
        self.assertEqual(recalculate_total_time(rm.modules), "9 weeks")

    def test_order_does_not_matter(self):
        tasks_a = [task("a", "2024-01-04"), task("b", "2024-01-01", "2024-01-02")]
        tasks_b = [task("c"), task("d", "2024-01-20", "2024-01-22")]
        forward = roadmap(tasks_a, tasks_b)
        backward = roadmap(list(reversed(tasks_b)), list(reversed(tasks_a)))
        self.assertEqual(recalculate_total_time(forward.modules), "22 days")
        self.assertEqual(recalculate_total_time(backward.modules), "22 days")


class RescheduleTests(TestCase):
    def test_cascade_shifts_moved_and_later_tasks_only(self):
        d = "2024-05-01"
        rm = roadmap([task("p1", d), task("p2", d)], [task("p3", d), task("p4", d), task("p5", d)])

        result = reschedule_roadmap(rm, rm.modules[1].tasks[0], "2024-05-04")

        self.assertEqual(starts(result), {
            "p1": date(2024, 5, 1), "p2": date(2024, 5, 1),
            "p3": date(2024, 5, 4), "p4": date(2024, 5, 4), "p5": date(2024, 5, 4),
        })
        self.assertEqual(result.total_time_estimate, "4 days")

    def test_cascade_crosses_module_boundary(self):
        rm = roadmap([task("x", "2024-01-01"), task("y", "2024-01-03")], [task("z", "2024-01-05")])

        result = reschedule_roadmap(rm, "x", "2024-01-02")

        self.assertEqual(starts(result), {
            "x": date(2024, 1, 2), "y": date(2024, 1, 4), "z": date(2024, 1, 6),
        })
        self.assertEqual(result.total_time_estimate, "5 days")

    def test_end_dates_move_with_start(self):
        rm = roadmap([task("a", "2024-01-01", "2024-01-03"), task("b", "2024-01-04", "2024-01-06")])

        result = reschedule_roadmap(rm, "a", "2024-01-08")

        a, b = result.modules[0].tasks
        self.assertEqual((a.start_date, a.end_date), (date(2024, 1, 8), date(2024, 1, 10)))
        self.assertEqual((b.start_date, b.end_date), (date(2024, 1, 11), date(2024, 1, 13)))
        self.assertEqual(result.total_time_estimate, "6 days")

    def test_backward_move(self):
        rm = roadmap([task("a", "2024-01-10"), task("b", "2024-01-12", "2024-01-14")])

        result = reschedule_roadmap(rm, "a", date(2024, 1, 5))

        b = result.modules[0].tasks[1]
        self.assertEqual((b.start_date, b.end_date), (date(2024, 1, 7), date(2024, 1, 9)))
        self.assertEqual(result.total_time_estimate, "5 days")

    def test_later_unscheduled_tasks_are_left_alone(self):
        rm = roadmap([task("a", "2024-01-01"), task("b"), task("c", "2024-01-03")])

        result = reschedule_roadmap(rm, "a", "2024-01-05")

        self.assertEqual(starts(result), {"a": date(2024, 1, 5), "b": None, "c": date(2024, 1, 7)})

    def test_earlier_tasks_never_shift_even_if_chronologically_later(self):
        rm = roadmap([task("a", "2024-02-01"), task("b", "2024-01-01"), task("c", "2024-01-02")])

        result = reschedule_roadmap(rm, "b", "2024-01-11")

        self.assertEqual(starts(result), {
            "a": date(2024, 2, 1), "b": date(2024, 1, 11), "c": date(2024, 1, 12),
        })
        self.assertEqual(result.total_time_estimate, "22 days")

    def test_same_date_is_a_noop(self):
        rm = roadmap([task("a", "2024-01-01")], [task("b", "2024-01-09")], total="2 weeks")

        result = reschedule_roadmap(rm, "a", "2024-01-01")

        self.assertEqual(result, rm)
        self.assertEqual(result.total_time_estimate, "2 weeks")

    def test_task_without_start_only_updates_itself(self):
        rm = roadmap([task("a", "2024-01-01"), task("b"), task("c", "2024-01-05")], total="5 days")

        result = reschedule_roadmap(rm, "b", "2024-03-01")

        self.assertEqual(starts(result), {
            "a": date(2024, 1, 1), "b": date(2024, 3, 1), "c": date(2024, 1, 5),
        })
        self.assertEqual(result.total_time_estimate, "5 days")

    def test_empty_target_clears_start_only(self):
        rm = roadmap([task("a", "2024-01-01", "2024-01-02"), task("b", "2024-01-05")])

        result = reschedule_roadmap(rm, "a", "")

        a = result.modules[0].tasks[0]
        self.assertIsNone(a.start_date)
        self.assertEqual(a.end_date, date(2024, 1, 2))
        self.assertEqual(starts(result)["b"], date(2024, 1, 5))

    def test_stored_task_is_authoritative(self):
        rm = roadmap([task("a", "2024-01-01"), task("b", "2024-01-02")])
        stale = task("a", "1999-01-01")

        result = reschedule_roadmap(rm, stale, "2024-01-02")

        self.assertEqual(starts(result), {"a": date(2024, 1, 2), "b": date(2024, 1, 3)})
        self.assertEqual(result.modules[0].tasks[0].title, "A")

    def test_input_roadmap_is_not_changed(self):
        rm = roadmap([task("a", "2024-01-01"), task("b", "2024-01-02")], total="2 days")

        reschedule_roadmap(rm, "a", "2024-01-10")

        self.assertEqual(starts(rm), {"a": date(2024, 1, 1), "b": date(2024, 1, 2)})
        self.assertEqual(rm.total_time_estimate, "2 days")

    def test_unknown_task_raises(self):
        rm = roadmap([task("a", "2024-01-01")])
        with self.assertRaises(TaskNotFound) as ctx:
            reschedule_roadmap(rm, "missing", "2024-01-02")
        self.assertEqual(ctx.exception.task_id, "missing")

    def test_cascade_past_supported_range_raises(self):
        rm = roadmap([task("a", "2024-01-01"), task("b", "2024-06-01")])
        with self.assertRaises(DateOutOfRange):
            reschedule_roadmap(rm, "a", "9999-12-01")

    def test_invalid_target_date_raises(self):
        rm = roadmap([task("a", "2024-01-01")])
        with self.assertRaises(InvalidDate):
            reschedule_roadmap(rm, "a", "2024-02-31")

    def test_find_task_reports_global_position(self):
        rm = roadmap([task("a"), task("b")], [task("c")])
        pos = find_task(rm, "c")
        self.assertEqual((pos.index, pos.module_index, pos.task_index), (2, 1, 0))


class UnscheduleTests(TestCase):
    def test_clears_dates_and_refreshes_total(self):
        rm = roadmap([task("a", "2024-01-01"), task("b", "2024-01-05", "2024-01-10")], total="10 days")

        result = unschedule_task(rm, "b")

        b = result.modules[0].tasks[1]
        self.assertIsNone(b.start_date)
        self.assertIsNone(b.end_date)
        self.assertEqual(result.total_time_estimate, "1 days")

    def test_unknown_task_raises(self):
        with self.assertRaises(TaskNotFound):
            unschedule_task(roadmap([task("a")]), "zzz")


class ProgressTests(TestCase):
    now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def test_completion_stamps_and_clears(self):
        earlier = datetime(2024, 5, 1, tzinfo=timezone.utc)
        rm = roadmap([task("a"), task("b", is_completed=True, completed_at=earlier)])

        done = set_task_completion(rm, ["a", "b"], True, now=self.now)
        a, b = done.modules[0].tasks
        self.assertTrue(a.is_completed)
        self.assertEqual(a.completed_at, self.now)
        self.assertEqual(b.completed_at, earlier)

        undone = set_task_completion(done, ["a"], False)
        self.assertFalse(undone.modules[0].tasks[0].is_completed)
        self.assertIsNone(undone.modules[0].tasks[0].completed_at)

    def test_completion_unknown_task_raises(self):
        with self.assertRaises(TaskNotFound):
            set_task_completion(roadmap([task("a")]), ["a", "nope"], True)

    def test_progress_statistics(self):
        rm = roadmap(
            [task("a", estimated_minutes=30, is_completed=True), task("b", estimated_minutes=60)],
            [],
            [task("c", estimated_minutes=15, is_completed=True)],
        )

        stats = calculate_progress(rm)

        self.assertEqual((stats.total, stats.completed, stats.percent), (3, 2, 67))
        self.assertEqual((stats.total_minutes, stats.completed_minutes), (105, 45))
        self.assertEqual([m.name for m in stats.modules], ["01", "02", "03"])
        self.assertEqual(stats.modules[0].remaining, 1)
        self.assertFalse(stats.modules[1].is_fully_complete)
        self.assertTrue(stats.modules[2].is_fully_complete)

    def test_empty_roadmap_progress(self):
        stats = calculate_progress(roadmap())
        self.assertEqual((stats.total, stats.percent), (0, 0))


class TaskEditTests(TestCase):
    now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def test_edit_with_new_start_reschedules_then_merges(self):
        rm = roadmap([task("x", "2024-01-01"), task("y", "2024-01-03")], [task("z", "2024-01-05")])

        result = update_task(rm, "x", {"title": "Eigenvalues", "priority": "High"}, "2024-01-02")

        x = result.modules[0].tasks[0]
        self.assertEqual((x.title, x.priority, x.start_date), ("Eigenvalues", "High", date(2024, 1, 2)))
        self.assertEqual(starts(result)["z"], date(2024, 1, 6))
        self.assertEqual(result.total_time_estimate, "5 days")

    def test_edit_without_new_start_keeps_schedule(self):
        rm = roadmap([task("a", "2024-01-01", "2024-01-02"), task("b", "2024-01-04")], total="4 days")

        result = update_task(rm, "a", {"notes": "ch. 3", "estimated_minutes": 90})

        a = result.modules[0].tasks[0]
        self.assertEqual((a.notes, a.estimated_minutes), ("ch. 3", 90))
        self.assertEqual((a.start_date, a.end_date), (date(2024, 1, 1), date(2024, 1, 2)))
        self.assertEqual(result.total_time_estimate, "4 days")

    def test_completion_stamped_only_on_transition(self):
        earlier = datetime(2024, 5, 1, tzinfo=timezone.utc)
        rm = roadmap([task("a"), task("b", is_completed=True, completed_at=earlier)])

        result = update_task(rm, "a", {"is_completed": True}, now=self.now)
        result = update_task(result, "b", {"is_completed": True, "title": "B2"}, now=self.now)

        a, b = result.modules[0].tasks
        self.assertEqual(a.completed_at, self.now)
        self.assertEqual(b.completed_at, earlier)

        reopened = update_task(result, "a", {"is_completed": False})
        self.assertIsNone(reopened.modules[0].tasks[0].completed_at)

    def test_dates_and_ids_cannot_be_edited_directly(self):
        rm = roadmap([task("a", "2024-01-01")])
        with self.assertRaises(InvalidTaskChange) as ctx:
            update_task(rm, "a", {"start_date": date(2024, 2, 1), "id": "b"})
        self.assertEqual(ctx.exception.fields, ["id", "start_date"])

    def test_edit_unknown_task_raises(self):
        with self.assertRaises(TaskNotFound):
            update_task(roadmap([task("a")]), "zzz", {"title": "T"})

    def test_toggle_sub_task(self):
        subs = (SubTask(id="s1", title="Read"), SubTask(id="s2", title="Solve", is_completed=True))
        rm = roadmap([task("a", sub_tasks=subs)])

        result = toggle_sub_task(rm, "a", "s1")
        result = toggle_sub_task(result, "a", "s2")

        self.assertEqual([st.is_completed for st in result.modules[0].tasks[0].sub_tasks], [True, False])

    def test_toggle_unknown_sub_task_raises(self):
        rm = roadmap([task("a", sub_tasks=(SubTask(id="s1", title="Read"),))])
        with self.assertRaises(SubTaskNotFound) as ctx:
            toggle_sub_task(rm, "a", "s9")
        self.assertEqual((ctx.exception.task_id, ctx.exception.sub_task_id), ("a", "s9"))


class RoadmapApiTests(APITestCase):
    def payload(self):
        return {
            "id": "rm-1",
            "title": "Linear Algebra",
            "description": "",
            "totalTimeEstimate": "3 weeks",
            "modules": [
                {"id": "m1", "title": "Vectors", "tasks": [
                    {"id": "x", "title": "X", "estimatedMinutes": 30, "priority": "High",
                     "startDate": "2024-01-01"},
                    {"id": "y", "title": "Y", "estimatedMinutes": 45, "startDate": "2024-01-03",
                     "subTasks": [{"id": "s1", "title": "Read", "isCompleted": True}]},
                ]},
                {"id": "m2", "title": "Matrices", "tasks": [
                    {"id": "z", "title": "Z", "estimatedMinutes": 60, "startDate": "2024-01-05",
                     "resources": [{"id": "r1", "title": "Notes", "url": "https://example.com"}]},
                ]},
            ],
        }

    def test_reschedule(self):
        res = self.client.post("/api/roadmaps/reschedule/",
                               {"roadmap": self.payload(), "taskId": "x", "newStartDate": "2024-01-02"},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        modules = res.data["roadmap"]["modules"]
        self.assertEqual([t["startDate"] for t in modules[0]["tasks"]], ["2024-01-02", "2024-01-04"])
        self.assertEqual(modules[1]["tasks"][0]["startDate"], "2024-01-06")
        self.assertEqual(res.data["totalTimeEstimate"], "5 days")
        self.assertEqual(res.data["roadmap"]["totalTimeEstimate"], "5 days")
        self.assertEqual(res.data["roadmap"]["id"], "rm-1")
        self.assertEqual(modules[0]["tasks"][1]["subTasks"][0]["title"], "Read")

    def test_reschedule_empty_date_clears_start(self):
        res = self.client.post("/api/roadmaps/reschedule/",
                               {"roadmap": self.payload(), "taskId": "y", "newStartDate": ""},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNone(res.data["roadmap"]["modules"][0]["tasks"][1]["startDate"])
        self.assertEqual(res.data["totalTimeEstimate"], "3 weeks")

    def test_reschedule_unknown_task(self):
        res = self.client.post("/api/roadmaps/reschedule/",
                               {"roadmap": self.payload(), "taskId": "nope", "newStartDate": "2024-01-02"},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["taskId"], "nope")

    def test_reschedule_invalid_date(self):
        res = self.client.post("/api/roadmaps/reschedule/",
                               {"roadmap": self.payload(), "taskId": "x", "newStartDate": "2024-02-31"},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_reschedule_requires_roadmap(self):
        res = self.client.post("/api/roadmaps/reschedule/", {"taskId": "x"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("roadmap", res.data)

    def test_unschedule(self):
        res = self.client.post("/api/roadmaps/unschedule/",
                               {"roadmap": self.payload(), "taskId": "z"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNone(res.data["roadmap"]["modules"][1]["tasks"][0]["startDate"])
        self.assertEqual(res.data["totalTimeEstimate"], "3 days")

    def test_duration(self):
        res = self.client.post("/api/roadmaps/duration/",
                               {"modules": self.payload()["modules"]}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"totalTimeEstimate": "5 days"})

    def test_completion(self):
        res = self.client.post("/api/roadmaps/completion/",
                               {"roadmap": self.payload(), "taskIds": ["x", "z"], "isCompleted": True},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        tasks = [t for m in res.data["roadmap"]["modules"] for t in m["tasks"]]
        self.assertEqual([t["isCompleted"] for t in tasks], [True, False, True])
        self.assertIsNotNone(tasks[0]["completedAt"])
        self.assertIsNone(tasks[1]["completedAt"])

    def test_completion_unknown_task(self):
        res = self.client.post("/api/roadmaps/completion/",
                               {"roadmap": self.payload(), "taskIds": ["q"], "isCompleted": True},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_progress(self):
        res = self.client.post("/api/roadmaps/progress/", {"roadmap": self.payload()}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["total"], 3)
        self.assertEqual(res.data["completed"], 0)
        self.assertEqual(res.data["totalMinutes"], 135)
        self.assertEqual(res.data["modules"][1]["name"], "02")

    def test_reschedule_requires_new_start_date(self):
        res = self.client.post("/api/roadmaps/reschedule/",
                               {"roadmap": self.payload(), "taskId": "x"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("newStartDate", res.data)

    def test_reschedule_null_date_clears_start(self):
        res = self.client.post("/api/roadmaps/reschedule/",
                               {"roadmap": self.payload(), "taskId": "x", "newStartDate": None},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNone(res.data["roadmap"]["modules"][0]["tasks"][0]["startDate"])

    def test_reschedule_rejects_compact_date(self):
        res = self.client.post("/api/roadmaps/reschedule/",
                               {"roadmap": self.payload(), "taskId": "x", "newStartDate": "20240102"},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("newStartDate", res.data)

    def test_reschedule_past_supported_range(self):
        res = self.client.post("/api/roadmaps/reschedule/",
                               {"roadmap": self.payload(), "taskId": "x", "newStartDate": "9999-12-30"},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["value"], "2024-01-03")

    def test_duration_not_scheduled(self):
        for modules in ([], [{"id": "m1", "title": "Vectors", "tasks": [{"id": "x", "title": "X"}]}]):
            res = self.client.post("/api/roadmaps/duration/", {"modules": modules}, format="json")
            self.assertEqual(res.status_code, status.HTTP_200_OK)
            self.assertEqual(res.data, {"totalTimeEstimate": "Not scheduled"})

    def test_update_task(self):
        res = self.client.post("/api/roadmaps/tasks/update/",
                               {"roadmap": self.payload(), "taskId": "y", "newStartDate": "2024-01-05",
                                "changes": {"title": "Read ch. 2", "isCompleted": True}},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        tasks = [t for m in res.data["roadmap"]["modules"] for t in m["tasks"]]
        self.assertEqual([t["startDate"] for t in tasks], ["2024-01-01", "2024-01-05", "2024-01-07"])
        self.assertEqual(tasks[1]["title"], "Read ch. 2")
        self.assertIsNotNone(tasks[1]["completedAt"])
        self.assertEqual(tasks[1]["subTasks"][0]["id"], "s1")
        self.assertEqual(res.data["totalTimeEstimate"], "7 days")
        self.assertTrue(res.data["durationChanged"])

    def test_update_task_without_date_keeps_schedule(self):
        res = self.client.post("/api/roadmaps/tasks/update/",
                               {"roadmap": self.payload(), "taskId": "z", "changes": {"priority": "Low"}},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        z = res.data["roadmap"]["modules"][1]["tasks"][0]
        self.assertEqual((z["priority"], z["startDate"]), ("Low", "2024-01-05"))
        self.assertFalse(res.data["durationChanged"])

    def test_toggle_sub_task(self):
        res = self.client.post("/api/roadmaps/subtasks/toggle/",
                               {"roadmap": self.payload(), "taskId": "y", "subTaskId": "s1"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(res.data["roadmap"]["modules"][0]["tasks"][1]["subTasks"][0]["isCompleted"])

    def test_toggle_unknown_sub_task(self):
        res = self.client.post("/api/roadmaps/subtasks/toggle/",
                               {"roadmap": self.payload(), "taskId": "y", "subTaskId": "s9"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["subTaskId"], "s9")
