from rest_framework import permissions


class IsSaleAdmin(permissions.BasePermission):
    """
    Permission: User must be an active sale administrator.
    """
    
    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_staff)
