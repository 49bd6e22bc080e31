from labelhook.exceptions import MalformedEnvelopeError, MissingRequestSectionError
from labelhook.util import schema_path, validate_schema


class AdmissionRequest:
    __SCHEMA_PATH = schema_path("ad_request_schema.json")

    def __init__(self, ad_request: dict):
        if isinstance(ad_request, dict) and ad_request.get("request") is None:
            raise MissingRequestSectionError(message="admission request is nil.")

        validate_schema(
            ad_request,
            self.__SCHEMA_PATH,
            "AdmissionReview",
            MalformedEnvelopeError,
            msg="couldn't read the admission review request: {validation_err}.",
        )

        request = ad_request["request"]
        self.uid = request["uid"]
        self.kind = request["kind"]["kind"]
        self.namespace = request.get("namespace", "")
        self.operation = request.get("operation", "")
        self.user = request.get("userInfo", {}).get("username", "")
        self.raw_object = request["object"]

    @property
    def context(self):
        return {
            "uid": self.uid,
            "user": self.user,
            "operation": self.operation,
            "kind": self.kind,
            "namespace": self.namespace,
        }
