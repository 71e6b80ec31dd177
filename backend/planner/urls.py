from django.urls import include, path

urlpatterns = [
    path("api/roadmaps/", include("roadmaps.urls")),
]
