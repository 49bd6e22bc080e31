import copy
import json
import os
from contextlib import contextmanager

import pytest

from labelhook.admission_request import AdmissionRequest
from labelhook.config import Config
from labelhook.workload_object import WorkloadObject

"""
This file is used for sharing fixtures across all other test files.
https://docs.pytest.org/en/stable/fixture.html#scope-sharing-fixtures-across-classes-modules-packages-or-session
"""

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")

# marks a label mapping that is missing entirely, as opposed to `None`
ABSENT = object()


@contextmanager
def no_exc():
    yield


def get_json(path):
    with open(path, "r") as file:
        return json.load(file)


def get_admreq(adm_type):
    try:
        return get_json(
            os.path.join(
                DATA_DIR, "sample_admission_requests", f"ad_request_{adm_type}.json"
            )
        )
    except FileNotFoundError:
        return None


def get_config_path(name):
    return os.path.join(DATA_DIR, "config", f"{name}.yaml")


def pod_admreq(labels=ABSENT, kind="Pod"):
    """
    Sample pod admission request with its labels swapped for `labels`.
    """
    ad_request = copy.deepcopy(get_admreq("pods"))
    ad_request["request"]["kind"]["kind"] = kind
    metadata = ad_request["request"]["object"]["metadata"]
    if labels is ABSENT:
        del metadata["labels"]
    else:
        metadata["labels"] = labels
    return ad_request


def pod(labels=ABSENT):
    return WorkloadObject(pod_admreq(labels)["request"]["object"], "Pod")


@pytest.fixture
def adm_req_samples():
    return [
        get_admreq(t)
        for t in (
            "pods",
            "deployments",
            "err",
            "nil",
            "invalid_object",
        )
    ]


@pytest.fixture
def adm_req(adm_req_samples):
    return AdmissionRequest(adm_req_samples[0])


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def client(config):
    from labelhook.flask_application import create_app

    return create_app(config).test_client()
