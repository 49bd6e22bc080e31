import logging
from collections import namedtuple

from labelhook.config import Config
from labelhook.workload_object import WorkloadObject

Decision = namedtuple("Decision", ["allowed", "reason"])

LABEL_ABSENT = "required label absent"


class LabelPolicy:
    """
    Label rules for the policed resource kind.

    Validation requires `validate_label_key` to be present, whatever its value.
    Mutation makes sure `mutate_label_key` holds `mutate_label_value`.
    """

    def __init__(self, config: Config):
        self.validate_label_key = config.validate_label_key
        self.mutate_label_key = config.mutate_label_key
        self.mutate_label_value = config.mutate_label_value

    def evaluate(self, wl_object: WorkloadObject):
        labels = wl_object.labels or {}
        if self.validate_label_key not in labels:
            return Decision(False, LABEL_ABSENT)
        return Decision(True, "")

    def correct(self, wl_object: WorkloadObject):
        labels = wl_object.labels or {}
        if labels.get(self.mutate_label_key) == self.mutate_label_value:
            return wl_object

        logging.info(
            "invalid or no %s label found - correcting that error",
            self.mutate_label_key,
            extra={"kind": wl_object.kind, "object_name": wl_object.name},
        )
        return wl_object.with_label(self.mutate_label_key, self.mutate_label_value)
