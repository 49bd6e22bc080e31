import logging

from flask import Flask, Response, request
from prometheus_client import CollectorRegistry
from prometheus_flask_exporter import NO_PREFIX, PrometheusMetrics

import labelhook.constants as const
from labelhook.admission_request import AdmissionRequest
from labelhook.admission_review import (
    decode,
    get_admission_review,
    get_patch_review,
    to_json,
)
from labelhook.config import Config
from labelhook.exceptions import (
    BaseLabelhookException,
    DiffError,
    EncodingError,
    PolicyInputError,
    ProtocolError,
)
from labelhook.patch import diff, to_bytes
from labelhook.policy import LabelPolicy
from labelhook.workload_object import extract


def metrics_label(response, label):
    json_response = (
        response.get_json(silent=True) if isinstance(response, Response) else None
    )
    if not json_response:
        return "" if label == "allowed" else str(getattr(response, "status_code", ""))
    if label == "allowed":
        return json_response["response"]["allowed"]
    status = json_response["response"].get("status", {})
    return status.get("code", response.status_code)


def _json_response(review: dict):
    return Response(to_json(review), status=200, mimetype=const.JSON_MEDIA_TYPE)


def _read_request():
    return decode(request.get_data(), request.headers.get("Content-Type", ""))


def _extract(admission_request: AdmissionRequest, kind: str):
    try:
        return extract(admission_request, kind)
    except BaseLabelhookException as err:
        # add contextual information to all errors
        err.update_context(**admission_request.context)
        raise err


def create_app(config: Config = None) -> Flask:
    """
    Create the Flask application serving the validating and mutating webhook
    for `config.target_kind` objects. `config` is loaded from disk when not
    given.
    """
    config = config or Config.load()
    policy = LabelPolicy(config)
    kind = config.target_kind.lower()

    app = Flask(__name__)
    metrics = PrometheusMetrics(
        app,
        defaults_prefix=NO_PREFIX,
        registry=CollectorRegistry(auto_describe=True),
        buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, float("inf")),
    )
    labels = {
        "allowed": lambda r: metrics_label(r, "allowed"),
        "status_code": lambda r: metrics_label(r, "status_code"),
    }

    def handle_bad_request(err: BaseLabelhookException):
        logging.error(str(err))
        return Response(err.message, status=400, mimetype="text/plain")

    for exception in (ProtocolError, PolicyInputError, DiffError):
        app.register_error_handler(exception, handle_bad_request)

    @app.errorhandler(EncodingError)
    def handle_encoding_error(err):
        logging.error(str(err))
        return Response(err.message, status=500, mimetype="text/plain")

    @app.route("/validate-pods", methods=["POST"])
    @metrics.counter(
        "validate_requests_total", "Total number of validate requests", labels=labels
    )
    def validate():
        """
        Handle the '/validate-pods' path. Admit the object if it carries the
        required label, deny it otherwise.
        """
        admission_request = _read_request()
        wl_object = _extract(admission_request, config.target_kind)

        decision = policy.evaluate(wl_object)
        if decision.allowed:
            review = get_admission_review(
                admission_request.uid, True, 202, f"valid {kind}"
            )
        else:
            logging.info(
                'denied %s "%s": %s',
                kind,
                wl_object.name,
                decision.reason,
                extra=admission_request.context,
            )
            review = get_admission_review(
                admission_request.uid, False, 403, f"{kind} label is invalid"
            )
        return _json_response(review)

    @app.route("/mutate-pods", methods=["POST"])
    @metrics.counter(
        "mutate_requests_total", "Total number of mutate requests", labels=labels
    )
    def mutate():
        """
        Handle the '/mutate-pods' path. Always admit the object, with a JSON
        Patch that sets the required label where it is missing or wrong.
        """
        admission_request = _read_request()
        wl_object = _extract(admission_request, config.target_kind)

        corrected = policy.correct(wl_object)
        patch = diff(wl_object, corrected)
        logging.debug(
            "patch for %s: %s", kind, patch.patch, extra=admission_request.context
        )
        return _json_response(get_patch_review(admission_request.uid, to_bytes(patch)))

    # health probe
    @app.route("/health", methods=["GET", "POST"])
    @metrics.do_not_track()
    def healthz():
        return "", 200

    # readiness probe
    @app.route("/ready", methods=["GET", "POST"])
    @metrics.do_not_track()
    def readyz():
        return "", 200

    return app
