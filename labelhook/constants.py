ADMISSION_API_VERSION = "admission.k8s.io/v1"
ADMISSION_KIND = "AdmissionReview"
JSON_MEDIA_TYPE = "application/json"
JSON_PATCH = "JSONPatch"

DEFAULT_TARGET_KIND = "Pod"
DEFAULT_VALIDATE_LABEL_KEY = "teacher"
DEFAULT_MUTATE_LABEL_KEY = "super-teacher"
DEFAULT_MUTATE_LABEL_VALUE = "Drewbernetes"

DEFAULT_CONFIG_PATH = "/app/config/config.yaml"
DEFAULT_TLS_CERT_PATH = "/etc/certs/webhook/tls.crt"
DEFAULT_TLS_KEY_PATH = "/etc/certs/webhook/tls.key"
DEFAULT_PORT = 8443
MAX_OBJECT_DEPTH = 256
