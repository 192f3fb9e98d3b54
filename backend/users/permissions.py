from rest_framework import permissions


class IsEstablishmentOperator(permissions.BasePermission):
    """Operators may only act on the establishment they belong to."""

    message = "Only operators of this establishment can perform this action."

    def has_permission(self, request, view):
        user = request.user
        if not (user.is_authenticated and user.is_operator):
            return False

        establishment_id = view.kwargs.get('establishment_id')
        if establishment_id is None:
            return True
        return user.establishment_id == int(establishment_id)

    def has_object_permission(self, request, view, obj):
        # obj is the establishment itself or a record belonging to one
        establishment_id = getattr(obj, 'establishment_id', None) or obj.pk
        return request.user.establishment_id == establishment_id


class IsClientSelf(permissions.BasePermission):
    """The ``client_id`` in the URL must be the requesting user."""

    message = "You can only access your own cart and orders."

    def has_permission(self, request, view):
        user = request.user
        if not user.is_authenticated:
            return False
        return user.is_staff or str(user.pk) == str(view.kwargs.get('client_id'))


class IsOrderParticipant(permissions.BasePermission):
    """
    Clients see their own orders; operators see their establishment's orders.
    """

    def has_object_permission(self, request, view, obj):
        user = request.user
        if user.is_staff:
            return True
        if obj.client_id == user.pk:
            return True
        return user.is_operator and obj.establishment_id == user.establishment_id
