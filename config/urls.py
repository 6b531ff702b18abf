"""
URL configuration for the Task Manager API.
"""
from django.http import JsonResponse
from django.urls import path
from ninja import NinjaAPI

from apps.core.handlers import register_exception_handlers

api = NinjaAPI(
    title="Task Manager API",
    version="1.0.0",
    description="Secure Task Management API",
    docs_url="/docs",
)
register_exception_handlers(api)

from apps.identity.api import auth_router, users_router
from apps.tasks.api import router as tasks_router

api.add_router("/auth", auth_router)
api.add_router("/users", users_router)
api.add_router("/tasks", tasks_router)


def health_check(request):
    return JsonResponse({
        'message': 'Welcome to Secure Task Management API',
        'version': api.version,
        'status': 'running',
    })


urlpatterns = [
    path('', health_check),
    path('api/v1/', api.urls),
]
