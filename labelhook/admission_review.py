import base64
import json
import logging

import labelhook.constants as const
from labelhook.admission_request import AdmissionRequest
from labelhook.exceptions import (
    EmptyBodyError,
    EncodingError,
    MalformedEnvelopeError,
    UnsupportedMediaTypeError,
)


def decode(body: bytes, content_type: str):
    """
    Decode the raw HTTP `body` of an admission call into an `AdmissionRequest`.

    Raise `UnsupportedMediaTypeError` if `content_type` isn't JSON,
    `EmptyBodyError` if there is nothing to read, `MalformedEnvelopeError` if the
    body isn't an AdmissionReview and `MissingRequestSectionError` if the
    review holds no request.
    """
    media_type = (content_type or "").partition(";")[0].strip().lower()
    if media_type != const.JSON_MEDIA_TYPE:
        msg = 'incorrect content type "{content_type}" - should be {expected}.'
        raise UnsupportedMediaTypeError(
            message=msg, content_type=content_type or "", expected=const.JSON_MEDIA_TYPE
        )

    if not body:
        raise EmptyBodyError(message="body is empty.")

    try:
        ad_request = json.loads(body)
    except (ValueError, RecursionError) as err:
        msg = "couldn't read the admission review request: {decode_err}."
        raise MalformedEnvelopeError(message=msg, decode_err=str(err)) from err

    logging.debug(ad_request)
    return AdmissionRequest(ad_request)


def get_admission_review(uid: str, allowed: bool, code: int, msg: str):
    """
    Get a standardized response object for a validation decision.

    Parameters
    ----------
    uid : str
        The uid of the request that was sent to the webhook.
    allowed : bool
        The decision, whether the request will be accepted or denied.
    code : int
        Status code embedded in the review, e.g. 202 or 403. The HTTP status of
        the response itself stays 200.
    msg : str
        Human readable reason for the decision.

    Return
    ----------
    AdmissionReview : dict
        Response is an AdmissionReview with following structure:

        {
          "apiVersion": "admission.k8s.io/v1",
          "kind": "AdmissionReview",
          "response": {
            "uid": uid,
            "allowed": allowed,
            "status": {
                "code": 403,
                "message": "pod label is invalid"
            }
          }
        }
    """
    return {
        "apiVersion": const.ADMISSION_API_VERSION,
        "kind": const.ADMISSION_KIND,
        "response": {
            "uid": uid,
            "allowed": allowed,
            "status": {"code": code, "message": msg},
        },
    }


def get_patch_review(uid: str, patch: bytes):
    """
    Get a standardized response object that admits the request and carries
    `patch`, a serialized JSON Patch document, as Base64.

        {
          "apiVersion": "admission.k8s.io/v1",
          "kind": "AdmissionReview",
          "response": {
            "uid": uid,
            "allowed": true,
            "patchType": "JSONPatch",
            "patch": "W3sib3AiOiAiYWRkIiwgLi4ufV0="
          }
        }
    """
    return {
        "apiVersion": const.ADMISSION_API_VERSION,
        "kind": const.ADMISSION_KIND,
        "response": {
            "uid": uid,
            "allowed": True,
            "patchType": const.JSON_PATCH,
            "patch": base64.b64encode(patch).decode("utf-8"),
        },
    }


def to_json(review: dict):
    try:
        return json.dumps(review).encode("utf-8")
    except (TypeError, ValueError) as err:
        raise EncodingError(
            message="couldn't marshal admission response", encode_err=str(err)
        ) from err
