import copy

import labelhook.constants as const
from labelhook.admission_request import AdmissionRequest
from labelhook.exceptions import UnparsableObjectError, UnsupportedKindError
from labelhook.util import schema_path, validate_schema

_SCHEMA_PATH = schema_path("workload_object_schema.json")


class WorkloadObject:
    """
    Read-only view on the object under admission. Only the labels are ever
    inspected, everything else is carried along untouched. Changes produce a
    new `WorkloadObject`.
    """

    def __init__(self, request_object: dict, kind: str = ""):
        self.__object = copy.deepcopy(request_object)
        self.kind = kind

    @property
    def name(self):
        metadata = self.__object.get("metadata") or {}
        return metadata.get("name") or metadata.get("generateName")

    @property
    def labels(self):
        labels = (self.__object.get("metadata") or {}).get("labels")
        return None if labels is None else dict(labels)

    def to_dict(self):
        return copy.deepcopy(self.__object)

    def with_label(self, key: str, value: str):
        request_object = self.to_dict()
        if request_object.get("metadata") is None:
            request_object["metadata"] = {}
        if request_object["metadata"].get("labels") is None:
            request_object["metadata"]["labels"] = {}
        request_object["metadata"]["labels"][key] = value
        return WorkloadObject(request_object, self.kind)

    def __eq__(self, other):
        if not isinstance(other, WorkloadObject):
            return NotImplemented
        return self.__object == other.__object

    def __repr__(self):
        return f"WorkloadObject(kind={self.kind!r}, name={self.name!r})"


def nesting_depth(value, limit: int = None):
    """
    Return how deeply `value` nests dicts and lists, a scalar being 1 level.
    Counting stops as soon as `limit` is exceeded.
    """
    depth, level = 0, [value]
    while level and (limit is None or depth <= limit):
        depth += 1
        children = []
        for item in level:
            if isinstance(item, dict):
                children.extend(item.values())
            elif isinstance(item, list):
                children.extend(item)
        level = children
    return depth


def extract(admission_request: AdmissionRequest, expected_kind: str):
    """
    Return the object of `admission_request` as a `WorkloadObject`.

    Raise `UnsupportedKindError` if the request is about anything other than
    `expected_kind` and `UnparsableObjectError` if the object doesn't have the
    shape of a Kubernetes resource or nests deeper than `MAX_OBJECT_DEPTH`.
    """
    if admission_request.kind != expected_kind:
        msg = "only {expected_kind} resources are supported."
        raise UnsupportedKindError(
            message=msg, expected_kind=expected_kind, kind=admission_request.kind
        )

    kind = expected_kind.lower()
    depth = nesting_depth(admission_request.raw_object, const.MAX_OBJECT_DEPTH)
    if depth > const.MAX_OBJECT_DEPTH:
        msg = "couldn't read {kind}: object nests deeper than {max_depth} levels."
        raise UnparsableObjectError(
            message=msg, kind=kind, max_depth=const.MAX_OBJECT_DEPTH
        )

    validate_schema(
        admission_request.raw_object,
        _SCHEMA_PATH,
        kind,
        UnparsableObjectError,
        msg="couldn't read {validation_kind}: {validation_err}.",
    )

    try:
        return WorkloadObject(admission_request.raw_object, expected_kind)
    except RecursionError as err:
        msg = "couldn't read {kind}: object is nested too deeply."
        raise UnparsableObjectError(message=msg, kind=kind) from err
