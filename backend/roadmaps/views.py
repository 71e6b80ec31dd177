# views.py
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .editing import UNCHANGED, toggle_sub_task, update_task
from .exceptions import InvalidDate, SchedulingError, SubTaskNotFound, TaskNotFound
from .progress import calculate_progress, set_task_completion
from .scheduler import recalculate_total_time, reschedule_roadmap, unschedule_task
from .serializers import (
    CompletionInputSerializer,
    DurationInputSerializer,
    ProgressSerializer,
    RescheduleInputSerializer,
    RoadmapInputSerializer,
    RoadmapSerializer,
    SubTaskToggleInputSerializer,
    TaskUpdateInputSerializer,
    UnscheduleInputSerializer,
)

logger = logging.getLogger(__name__)


def scheduling_error_response(exc: SchedulingError) -> Response:
    """Translate a core scheduling error into a JSON error response."""
    if isinstance(exc, SubTaskNotFound):
        logger.warning("Sub-task %r not found in task %r", exc.sub_task_id, exc.task_id)
        return Response({"error": "Sub-task not found", "taskId": exc.task_id, "subTaskId": exc.sub_task_id},
                        status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, TaskNotFound):
        logger.warning("Task %r not found in submitted roadmap", exc.task_id)
        return Response({"error": "Task not found", "taskId": exc.task_id},
                        status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, InvalidDate):
        logger.warning("Rejected invalid date %r", exc.value)
        return Response({"error": str(exc), "value": str(exc.value)},
                        status=status.HTTP_400_BAD_REQUEST)
    logger.warning("Scheduling request failed: %s", exc)
    return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


def roadmap_response(roadmap) -> Response:
    return Response({"roadmap": RoadmapSerializer(roadmap).data,
                     "totalTimeEstimate": roadmap.total_time_estimate},
                    status=status.HTTP_200_OK)


class RescheduleTask(APIView):
    """
    POST /api/roadmaps/reschedule/
    Accepts {roadmap, taskId, newStartDate}, moves the task and shifts every
    later scheduled task by the same number of days. Returns the new roadmap
    and its recomputed total duration.
    """

    def post(self, request):
        serializer = RescheduleInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            updated = reschedule_roadmap(data["roadmap"], data["task_id"], data["new_start_date"])
        except SchedulingError as exc:
            return scheduling_error_response(exc)
        return roadmap_response(updated)


class UnscheduleTask(APIView):
    """
    POST /api/roadmaps/unschedule/
    Accepts {roadmap, taskId}; clears the task's dates (calendar drop outside any day).
    """

    def post(self, request):
        serializer = UnscheduleInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            updated = unschedule_task(data["roadmap"], data["task_id"])
        except SchedulingError as exc:
            return scheduling_error_response(exc)
        return roadmap_response(updated)


class TotalDuration(APIView):
    """
    POST /api/roadmaps/duration/
    Accepts {modules}, returns {totalTimeEstimate} derived from the task dates.
    """

    def post(self, request):
        serializer = DurationInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        total = recalculate_total_time(serializer.validated_data["modules"])
        return Response({"totalTimeEstimate": total}, status=status.HTTP_200_OK)


class TaskCompletion(APIView):
    """
    POST /api/roadmaps/completion/
    Accepts {roadmap, taskIds, isCompleted}; toggles completion for each task.
    """

    def post(self, request):
        serializer = CompletionInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            updated = set_task_completion(data["roadmap"], data["task_ids"], data["is_completed"])
        except SchedulingError as exc:
            return scheduling_error_response(exc)
        return Response({"roadmap": RoadmapSerializer(updated).data}, status=status.HTTP_200_OK)


class RoadmapProgressView(APIView):
    """
    POST /api/roadmaps/progress/
    Accepts {roadmap}, returns completion counts and minutes overall and per module.
    """

    def post(self, request):
        serializer = RoadmapInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        stats = calculate_progress(serializer.validated_data["roadmap"])
        return Response(ProgressSerializer(stats).data, status=status.HTTP_200_OK)


class UpdateTask(APIView):
    """
    POST /api/roadmaps/tasks/update/
    Accepts {roadmap, taskId, changes, newStartDate?}. A newStartDate reschedules
    the task (and the tasks after it) before the other edits are merged in.
    """

    def post(self, request):
        serializer = TaskUpdateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        roadmap = data["roadmap"]

        try:
            updated = update_task(roadmap, data["task_id"], data.get("changes"),
                                  data.get("new_start_date", UNCHANGED))
        except SchedulingError as exc:
            return scheduling_error_response(exc)
        return Response({"roadmap": RoadmapSerializer(updated).data,
                         "totalTimeEstimate": updated.total_time_estimate,
                         "durationChanged": updated.total_time_estimate != roadmap.total_time_estimate},
                        status=status.HTTP_200_OK)


class ToggleSubTask(APIView):
    """
    POST /api/roadmaps/subtasks/toggle/
    Accepts {roadmap, taskId, subTaskId}; flips the sub-task's completion flag.
    """

    def post(self, request):
        serializer = SubTaskToggleInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            updated = toggle_sub_task(data["roadmap"], data["task_id"], data["sub_task_id"])
        except SchedulingError as exc:
            return scheduling_error_response(exc)
        return Response({"roadmap": RoadmapSerializer(updated).data}, status=status.HTTP_200_OK)
