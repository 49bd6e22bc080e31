import json

import jsonpatch

from labelhook.exceptions import DiffComputationError
from labelhook.workload_object import WorkloadObject


def diff(original: WorkloadObject, corrected: WorkloadObject):
    """
    Return the `jsonpatch.JsonPatch` that turns `original` into `corrected`.
    Equal objects give an empty patch.

    Raise `DiffComputationError` if either side isn't JSON serializable or is
    nested too deeply to compare.
    """
    try:
        src = json.loads(json.dumps(original.to_dict()))
        dst = json.loads(json.dumps(corrected.to_dict()))
        return jsonpatch.JsonPatch.from_diff(src, dst)
    except (TypeError, ValueError, RecursionError) as err:
        msg = "there was an error comparing the mutated {kind} with the original."
        raise DiffComputationError(
            message=msg, kind=original.kind.lower(), diff_err=str(err)
        ) from err


def to_bytes(patch: jsonpatch.JsonPatch):
    try:
        return patch.to_string().encode("utf-8")
    except (TypeError, ValueError) as err:
        raise DiffComputationError(
            message="there was an error marshalling the patch.", diff_err=str(err)
        ) from err
