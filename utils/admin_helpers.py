from typing import Optional


class AdminHelperMixin:
    """Mixin to inject a short helper message into admin changelist and change form contexts.

    Usage:
      - Define `admin_helper_message` string on your ModelAdmin.
      - The message is rendered above the list and on the edit form.
    """

    admin_helper_message: Optional[str] = None

    def _inject_helper(self, extra_context):
        extra_context = extra_context or {}
        if self.admin_helper_message:
            extra_context["admin_helper_message"] = self.admin_helper_message
        return extra_context

    def changelist_view(self, request, extra_context=None):
        extra_context = self._inject_helper(extra_context)
        return super().changelist_view(request, extra_context=extra_context)

    def change_view(self, request, object_id, form_url="", extra_context=None):
        extra_context = self._inject_helper(extra_context)
        return super().change_view(
            request, object_id, form_url, extra_context=extra_context
        )
