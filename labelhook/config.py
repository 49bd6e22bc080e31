import logging
import os

import yaml

import labelhook.constants as const
from labelhook.exceptions import InvalidConfigurationFormatError
from labelhook.util import schema_path, validate_schema


class Config:
    """
    Config object holding the resource kind that is policed and the labels the
    webhook checks and sets.
    """

    __SCHEMA_PATH = schema_path("config_schema.json")

    target_kind: str
    validate_label_key: str
    mutate_label_key: str
    mutate_label_value: str

    def __init__(
        self,
        target_kind: str = const.DEFAULT_TARGET_KIND,
        validate_label_key: str = const.DEFAULT_VALIDATE_LABEL_KEY,
        mutate_label_key: str = const.DEFAULT_MUTATE_LABEL_KEY,
        mutate_label_value: str = const.DEFAULT_MUTATE_LABEL_VALUE,
    ):
        self.target_kind = target_kind
        self.validate_label_key = validate_label_key
        self.mutate_label_key = mutate_label_key
        self.mutate_label_value = mutate_label_value

    @classmethod
    def load(cls, path: str = None):
        """
        Create a Config object from the YAML file at `path`, or the one named by
        `LABELHOOK_CONFIG_PATH`. Missing files and missing options fall back to
        the defaults.

        Raise `InvalidConfigurationFormatError` if the file has an invalid format.
        """
        path = path or os.environ.get("LABELHOOK_CONFIG_PATH", const.DEFAULT_CONFIG_PATH)
        try:
            with open(path, "r", encoding="utf-8") as configfile:
                config = yaml.safe_load(configfile) or {}
        except FileNotFoundError:
            logging.debug("No configuration file found at %s. Using defaults.", path)
            config = {}
        except yaml.YAMLError as err:
            msg = "Error loading configuration file {path}: {yaml_err}"
            raise InvalidConfigurationFormatError(
                message=msg, path=path, yaml_err=str(err)
            ) from err

        validate_schema(
            config,
            cls.__SCHEMA_PATH,
            "Labelhook configuration",
            InvalidConfigurationFormatError,
        )

        validate = config.get("validate", {})
        mutate = config.get("mutate", {})
        return cls(
            target_kind=config.get("targetKind", const.DEFAULT_TARGET_KIND),
            validate_label_key=validate.get(
                "requiredLabelKey", const.DEFAULT_VALIDATE_LABEL_KEY
            ),
            mutate_label_key=mutate.get(
                "requiredLabelKey", const.DEFAULT_MUTATE_LABEL_KEY
            ),
            mutate_label_value=mutate.get(
                "requiredLabelValue", const.DEFAULT_MUTATE_LABEL_VALUE
            ),
        )

    def __repr__(self):
        return (
            f"Config(target_kind={self.target_kind!r}, "
            f"validate_label_key={self.validate_label_key!r}, "
            f"mutate_label_key={self.mutate_label_key!r}, "
            f"mutate_label_value={self.mutate_label_value!r})"
        )
