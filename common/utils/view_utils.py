from django.shortcuts import get_object_or_404

from rest_framework import mixins, status
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet


class ReadWriteSerializerMixin:
    """
    Lets a viewset validate input with `write_serializer_class` and render
    output with `read_serializer_class`, falling back to `serializer_class`.
    """

    def get_read_serializer_class(self):
        return getattr(self, "read_serializer_class", None) or self.get_serializer_class()

    def get_write_serializer_class(self):
        return getattr(self, "write_serializer_class", None) or self.get_serializer_class()

    def get_read_serializer(self, *args, **kwargs):
        kwargs["context"] = self.get_serializer_context()
        return self.get_read_serializer_class()(*args, **kwargs)

    def get_write_serializer(self, *args, **kwargs):
        kwargs["context"] = self.get_serializer_context()
        return self.get_write_serializer_class()(*args, **kwargs)

    def get_return_object(self, instance):
        """
        Re-fetches `instance` through the view queryset so the response carries
        its selects and prefetches.
        """
        return get_object_or_404(self.get_queryset(), pk=instance.pk)


class CreateModelMixin(ReadWriteSerializerMixin, mixins.CreateModelMixin):
    def create(self, request, *args, **kwargs):
        serializer = self.get_write_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        instance = self.perform_create(serializer)
        return_serializer = self.get_read_serializer(self.get_return_object(instance))
        headers = self.get_success_headers(return_serializer.data)
        return Response(return_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def perform_create(self, serializer):
        return serializer.save()


class UpdateModelMixin(ReadWriteSerializerMixin, mixins.UpdateModelMixin):
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_write_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        instance = self.perform_update(serializer)
        return_serializer = self.get_read_serializer(self.get_return_object(instance))
        return Response(return_serializer.data)

    def perform_update(self, serializer):
        return serializer.save()


class RetrieveModelMixin(ReadWriteSerializerMixin, mixins.RetrieveModelMixin):
    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        return Response(self.get_read_serializer(instance).data)


class MessageDestroyModelMixin(mixins.DestroyModelMixin):
    """
    Destroy that answers 200 with a confirmation message instead of an empty 204.
    """

    destroy_message = "Deleted successfully."

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        return Response({"message": self.destroy_message}, status=status.HTTP_200_OK)


class NoCreateNoListRollcallModelViewSet(
    RetrieveModelMixin,
    UpdateModelMixin,
    MessageDestroyModelMixin,
    GenericViewSet,
):
    """
    Retrieve, update, partial update and destroy a single rollcall model.
    """

    pass


class NoUpdateNoListRollcallModelViewSet(
    CreateModelMixin,
    RetrieveModelMixin,
    MessageDestroyModelMixin,
    GenericViewSet,
):
    """
    Create, retrieve and destroy a single rollcall model.
    """

    pass
