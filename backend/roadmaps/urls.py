from django.urls import path

from . import views

urlpatterns = [
    path("reschedule/", views.RescheduleTask.as_view(), name="roadmap-reschedule"),
    path("unschedule/", views.UnscheduleTask.as_view(), name="roadmap-unschedule"),
    path("duration/", views.TotalDuration.as_view(), name="roadmap-duration"),
    path("completion/", views.TaskCompletion.as_view(), name="roadmap-completion"),
    path("progress/", views.RoadmapProgressView.as_view(), name="roadmap-progress"),
    path("tasks/update/", views.UpdateTask.as_view(), name="roadmap-task-update"),
    path("subtasks/toggle/", views.ToggleSubTask.as_view(), name="roadmap-subtask-toggle"),
]
