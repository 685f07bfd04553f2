"""Constants for the Automotive Dev Operator."""

# API Group
API_GROUP = "automotive.sdv.cloud.redhat.com"
API_GROUP_VERSION = f"{API_GROUP}/v1"

# Resource Kinds
KIND_AUTOMOTIVE_DEV_CONFIG = "AutomotiveDevConfig"
KIND_SECRET = "Secret"

# Namespaces
DEFAULT_NAMESPACE = "automotive-dev-operator-system"
NAMESPACE_ENV_VAR = "POD_NAMESPACE"

# Labels
LABEL_NAME = "app.kubernetes.io/name"
LABEL_PART_OF = "app.kubernetes.io/part-of"
LABEL_COMPONENT = "app.kubernetes.io/component"

# OAuth proxy secrets
OAUTH_PROXY_WEBUI_SECRET = "ado-webui-oauth-proxy"
OAUTH_PROXY_BUILD_API_SECRET = "ado-build-api-oauth-proxy"
COOKIE_SECRET_KEY = "cookie-secret"
COOKIE_SECRET_LENGTH = 32
SECRET_TYPE_OPAQUE = "Opaque"

# Field Manager
FIELD_MANAGER = "automotive-dev-operator"

# Build config defaults
DEFAULT_PVC_SIZE = "8Gi"
DEFAULT_SERVE_EXPIRY_HOURS = 24

# Status phases
PHASE_PENDING = "Pending"
PHASE_READY = "Ready"
PHASE_FAILED = "Failed"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_VALIDATE_SUCCEEDED = "ValidateSucceeded"
EVENT_REASON_VALIDATE_FAILED = "ValidateFailed"
EVENT_REASON_OAUTH_SECRETS_READY = "OAuthSecretsReady"
EVENT_REASON_OAUTH_SECRETS_FAILED = "OAuthSecretsFailed"
