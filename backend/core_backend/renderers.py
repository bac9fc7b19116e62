from rest_framework.renderers import JSONRenderer


class EnvelopeJSONRenderer(JSONRenderer):
    """
    Wraps successful payloads as ``{"success": true, "data": ...}``.

    Error responses are already enveloped by the exception handler, and views
    that return their own envelope (e.g. delete confirmations) pass through.
    """

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = (renderer_context or {}).get("response")
        if response is not None and response.status_code < 400:
            if not (isinstance(data, dict) and "success" in data):
                data = {"success": True, "data": data}
        return super().render(data, accepted_media_type, renderer_context)
