from django.http import JsonResponse
from django.utils import timezone


def health_check(request):
    """Simple health check endpoint that doesn't touch the database"""
    return JsonResponse(
        {
            "success": True,
            "message": "Cafe and Bar Game Management System API is running",
            "timestamp": timezone.now().isoformat(),
        }
    )


def route_not_found(request, exception=None):
    return JsonResponse({"success": False, "error": "Route not found"}, status=404)


def server_error(request):
    return JsonResponse({"success": False, "error": "Internal server error"}, status=500)
