import functools
import json
import os

from jsonschema import FormatChecker, ValidationError, validate

RES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "res")


def schema_path(name: str):
    return os.path.join(RES_DIR, name)


@functools.lru_cache(maxsize=None)
def load_schema(schema_path: str):
    """
    Return the parsed JSON schema at `schema_path`. Schemas are read once per
    process and must not be modified by callers.
    """
    with open(schema_path, "r", encoding="utf-8") as schema_file:
        return json.load(schema_file)


def validate_schema(
    data,
    schema_path: str,
    kind: str,
    exception,
    msg: str = "{validation_kind} has an invalid format: {validation_err}.",
):
    try:
        validate(
            instance=data, schema=load_schema(schema_path), format_checker=FormatChecker()
        )
    except ValidationError as err:
        raise exception(
            message=msg,
            validation_kind=kind,
            validation_err=err.message,
        ) from err
