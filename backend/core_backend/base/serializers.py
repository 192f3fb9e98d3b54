from rest_framework import serializers


class BaseModelSerializer(serializers.ModelSerializer):
    """
    Base serializer that provides common functionality.

    Every model serializer in the project derives from this class so
    project-wide validation has a single place to live. Views using
    OptimizedQuerysetMixin read the eager-loading hints from Meta.
    """

    class Meta:
        select_related_fields = []
        prefetch_related_fields = []

    def validate(self, data):
        """
        Base validation that can be extended by child classes.
        """
        data = super().validate(data)
        return data
