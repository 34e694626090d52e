ADOPTIUM_API_BASE = "https://api.adoptium.net"
ADOPTOPENJDK_API_BASE = "https://api.adoptopenjdk.net"

API_AVAILABLE_RELEASES = "{api_base}/v3/info/available_releases"
API_FEATURE_RELEASES = "{api_base}/v3/assets/feature_releases/{feature_version}/{release_type}"
API_RELEASE_VERSIONS = "{api_base}/v3/info/release_versions"
API_VERSION_ASSETS = "{api_base}/v3/assets/version/{version}"

PAGE_SIZE = 10

TEMURIN_VENDOR = "temurin"
SEMERU_VENDOR = "semeru"

SLUG_PREFIX = "jdk"
