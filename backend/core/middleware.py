from __future__ import annotations
import json
import logging
import uuid

REQUEST_ID_HEADER = "X-Request-ID"
SENSITIVE_KEYS = {"password", "passwd", "senha", "token", "authorization"}
REDACTED = "***redacted***"

def _client_ip(request):
    xff = request.META.get("HTTP_X_FORWARDED_FOR")
    if xff:
        return xff.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")

def _redact_mapping(data):
    out = {}
    if not isinstance(data, dict):
        data = dict(data.items()) if hasattr(data, "items") else {}
    for k, v in data.items():
        key = str(k).lower()
        if key in SENSITIVE_KEYS:
            out[k] = REDACTED
        elif isinstance(v, dict):
            out[k] = _redact_mapping(v)
        else:
            # evita objetos não serializáveis
            out[k] = v if isinstance(v, (str, int, float, bool, type(None))) else str(v)
    return out

def _body_excerpt(request):
    """Trecho do corpo JSON com campos sensíveis mascarados."""
    raw = (request.body or b"")[:2048]
    try:
        parsed = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return "<unparseable>"
    return _redact_mapping(parsed) if isinstance(parsed, dict) else "<non-object>"


class ErrorLoggingMiddleware:
    """Atribui um id à requisição e registra exceções não tratadas e respostas 5xx."""
    def __init__(self, get_response):
        self.get_response = get_response
        self.logger = logging.getLogger("django.request")

    def __call__(self, request):
        req_id = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        request._request_id = req_id
        try:
            response = self.get_response(request)
        except Exception:
            self._log_exception(request)
            raise
        if getattr(response, "status_code", 200) >= 500:
            self._log_5xx(request, response)
        response[REQUEST_ID_HEADER] = req_id
        return response

    def _build_context(self, request):
        content_type = request.META.get("CONTENT_TYPE", "")
        body_excerpt = None

        if "application/json" in content_type:
            try:
                body_excerpt = _body_excerpt(request)
            except Exception:
                body_excerpt = "<unavailable>"

        # preenchido pela autenticação do DRF (Identity) quando houver token válido
        identity = getattr(request, "user", None)
        if getattr(identity, "is_authenticated", False):
            who = f"{identity.id}:{identity.role}"
        else:
            who = "Anonymous"

        return {
            "id": getattr(request, "_request_id", None),
            "method": request.method,
            "path": request.get_full_path(),
            "ip": _client_ip(request),
            "user": who,
            "ua": request.META.get("HTTP_USER_AGENT", ""),
            "referer": request.META.get("HTTP_REFERER", ""),
            "get": _redact_mapping(getattr(request, "GET", {})),
            "json_body_excerpt": body_excerpt,
        }

    def _log_exception(self, request):
        ctx = self._build_context(request)
        self.logger.error(
            "Unhandled exception | ctx=%s",
            json.dumps(ctx, ensure_ascii=False, default=str),
            exc_info=True,
        )

    def _log_5xx(self, request, response):
        ctx = self._build_context(request)
        ctx["status_code"] = getattr(response, "status_code", None)
        self.logger.error(
            "5xx response | ctx=%s",
            json.dumps(ctx, ensure_ascii=False, default=str),
        )
