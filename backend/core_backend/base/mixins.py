class OptimizedQuerysetMixin:
    """
    A view mixin that optimizes the queryset from the serializer's Meta
    `select_related_fields` and `prefetch_related_fields` attributes.

    Works with any GenericAPIView, including viewsets where the serializer
    may differ per action.
    """

    def get_queryset(self):
        queryset = super().get_queryset()

        meta = getattr(self.get_serializer_class(), "Meta", None)
        select_related = getattr(meta, "select_related_fields", None)
        prefetch_related = getattr(meta, "prefetch_related_fields", None)

        if select_related:
            queryset = queryset.select_related(*select_related)
        if prefetch_related:
            queryset = queryset.prefetch_related(*prefetch_related)
        return queryset
