from rest_framework import serializers

from .entities import PRIORITIES, Collaborator, Module, Resource, Roadmap, SubTask, Task
from .scheduler import DATE_RE


class CalendarDateField(serializers.DateField):
    """YYYY-MM-DD date; an empty string means "no date"."""

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_null", True)
        super().__init__(**kwargs)

    def to_internal_value(self, value):
        if value in ("", None):
            return None
        if isinstance(value, str) and not DATE_RE.fullmatch(value):
            raise serializers.ValidationError("Date has wrong format. Use YYYY-MM-DD.")
        return super().to_internal_value(value)


class SubTaskSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    isCompleted = serializers.BooleanField(source="is_completed", default=False)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    def create(self, validated_data):
        return SubTask(**validated_data)


class ResourceSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    url = serializers.CharField()

    def create(self, validated_data):
        return Resource(**validated_data)


class TaskSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField(default="", allow_blank=True)
    estimatedMinutes = serializers.IntegerField(source="estimated_minutes", min_value=0, default=0)
    priority = serializers.ChoiceField(choices=PRIORITIES, default="Medium")
    isCompleted = serializers.BooleanField(source="is_completed", default=False)
    completedAt = serializers.DateTimeField(source="completed_at", required=False, allow_null=True)
    startDate = CalendarDateField(source="start_date")
    endDate = CalendarDateField(source="end_date")
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    subTasks = SubTaskSerializer(source="sub_tasks", many=True, required=False)
    resources = ResourceSerializer(many=True, required=False)

    def create(self, validated_data):
        data = dict(validated_data)
        data["sub_tasks"] = tuple(SubTask(**st) for st in data.get("sub_tasks", ()))
        data["resources"] = tuple(Resource(**r) for r in data.get("resources", ()))
        return Task(**data)


class ModuleSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField(default="", allow_blank=True)
    tasks = TaskSerializer(many=True)

    def create(self, validated_data):
        data = dict(validated_data)
        task_serializer = TaskSerializer()
        data["tasks"] = tuple(task_serializer.create(t) for t in data["tasks"])
        return Module(**data)


class CollaboratorSerializer(serializers.Serializer):
    email = serializers.EmailField()
    role = serializers.ChoiceField(choices=("owner", "editor"), default="editor")
    status = serializers.ChoiceField(choices=("pending", "accepted"), required=False, allow_null=True)


class RoadmapSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_null=True)
    createdAt = serializers.CharField(source="created_at", required=False, allow_null=True)
    title = serializers.CharField()
    description = serializers.CharField(default="", allow_blank=True)
    totalTimeEstimate = serializers.CharField(source="total_time_estimate", default="", allow_blank=True)
    modules = ModuleSerializer(many=True)
    userId = serializers.CharField(source="user_id", required=False, allow_null=True)
    ownerEmail = serializers.CharField(source="owner_email", required=False, allow_null=True)
    collaborators = CollaboratorSerializer(many=True, required=False)

    def create(self, validated_data):
        data = dict(validated_data)
        module_serializer = ModuleSerializer()
        data["modules"] = tuple(module_serializer.create(m) for m in data["modules"])
        data["collaborators"] = tuple(Collaborator(**c) for c in data.get("collaborators", ()))
        return Roadmap(**data)


class RoadmapInputSerializer(serializers.Serializer):
    """Base for requests carrying a full roadmap snapshot; `roadmap` validates to a Roadmap."""
    roadmap = RoadmapSerializer()

    def validate_roadmap(self, value):
        return RoadmapSerializer().create(value)


class RescheduleInputSerializer(RoadmapInputSerializer):
    taskId = serializers.CharField(source="task_id")
    # "" or null clears the start date; leaving the key out is an error
    newStartDate = CalendarDateField(source="new_start_date", required=True)


class UnscheduleInputSerializer(RoadmapInputSerializer):
    taskId = serializers.CharField(source="task_id")


class CompletionInputSerializer(RoadmapInputSerializer):
    taskIds = serializers.ListField(source="task_ids", child=serializers.CharField(), allow_empty=False)
    isCompleted = serializers.BooleanField(source="is_completed")


class DurationInputSerializer(serializers.Serializer):
    modules = ModuleSerializer(many=True)

    def validate_modules(self, value):
        module_serializer = ModuleSerializer()
        return tuple(module_serializer.create(m) for m in value)


class ModuleProgressSerializer(serializers.Serializer):
    name = serializers.CharField()
    title = serializers.CharField()
    total = serializers.IntegerField()
    completed = serializers.IntegerField()
    remaining = serializers.IntegerField()
    isFullyComplete = serializers.BooleanField(source="is_fully_complete")


class ProgressSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    completed = serializers.IntegerField()
    percent = serializers.IntegerField()
    totalMinutes = serializers.IntegerField(source="total_minutes")
    completedMinutes = serializers.IntegerField(source="completed_minutes")
    modules = ModuleProgressSerializer(many=True)


class TaskChangesSerializer(serializers.Serializer):
    """Edited task fields; only the keys sent are changed."""
    title = serializers.CharField(required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    estimatedMinutes = serializers.IntegerField(source="estimated_minutes", min_value=0, required=False)
    priority = serializers.ChoiceField(choices=PRIORITIES, required=False)
    isCompleted = serializers.BooleanField(source="is_completed", required=False)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    subTasks = SubTaskSerializer(source="sub_tasks", many=True, required=False)
    resources = ResourceSerializer(many=True, required=False)


class TaskUpdateInputSerializer(RoadmapInputSerializer):
    taskId = serializers.CharField(source="task_id")
    changes = TaskChangesSerializer(required=False)
    # left out: schedule untouched; "" or null: clear the start date
    newStartDate = CalendarDateField(source="new_start_date")

    def validate_changes(self, value):
        data = dict(value)
        if "sub_tasks" in data:
            data["sub_tasks"] = tuple(SubTask(**st) for st in data["sub_tasks"])
        if "resources" in data:
            data["resources"] = tuple(Resource(**r) for r in data["resources"])
        return data


class SubTaskToggleInputSerializer(RoadmapInputSerializer):
    taskId = serializers.CharField(source="task_id")
    subTaskId = serializers.CharField(source="sub_task_id")
