import logging
from datetime import datetime as dt, timezone

from pythonjsonlogger import jsonlogger

PROBE_PATHS = ("/ready", "/health")


class LabelhookLoggingWrapper:
    """
    WSGI middleware that writes one structured `request log` record per HTTP
    request. Probe requests are logged at DEBUG so they don't drown the rest.
    """

    def __init__(self, app, log_level):
        # no handler of its own, records propagate to the root logger
        self.logger = logging.getLogger("wsgi")
        self.logger.setLevel(log_level)
        self.app = app

    def __call__(self, environ, start_response):
        statuses = []

        def recording_start_response(status, response_headers, exc_info=None):
            statuses.append(status)
            return start_response(status, response_headers, exc_info)

        result = self.app(environ, recording_start_response)

        # an app may restart the response through exc_info, the last status counts
        status = statuses[-1] if statuses else ""
        level = logging.DEBUG if environ.get("PATH_INFO") in PROBE_PATHS else logging.INFO
        self.logger.log(level, "request log", extra=_request_fields(environ, status))
        return result


def _request_fields(environ, status: str):
    return {
        "client_ip": environ.get("REMOTE_ADDR", ""),
        "method": environ.get("REQUEST_METHOD", ""),
        "path": environ.get("PATH_INFO", ""),
        "query": environ.get("QUERY_STRING", ""),
        "protocol": environ.get("SERVER_PROTOCOL", ""),
        "status_code": status.partition(" ")[0],
    }


class JsonLogFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        if "timestamp" not in log_record:
            log_record["timestamp"] = str(dt.now(timezone.utc))

        if log_record.get("message") == "request log":
            del log_record["message"]
