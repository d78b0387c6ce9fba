import requests

from .errors import MigrationError

DEFAULT_BASE_URL = "https://manage.kontent.ai/v2"


class PreFlightCheckError(MigrationError):
    """Custom exception for pre-flight check failures."""
    pass


def run_kontent_pre_flight_checks(config: dict):
    """
    Verifies that the Kontent.ai environment is correctly configured for migration.

    Args:
        config: The application configuration dictionary.

    Raises:
        PreFlightCheckError: If any check fails.
    """
    print("[INFO] Running pre-flight checks...")

    kontent = config.get("kontent", {})
    api_key = kontent.get("api_key")
    environment_id = kontent.get("environment_id")
    base_url = kontent.get("base_url") or DEFAULT_BASE_URL
    type_codename = config.get("migration", {}).get("content_type_codename", "rich_text")

    if not api_key:
        raise PreFlightCheckError("Kontent.ai Management API key not found in the configuration file.")
    if not environment_id:
        raise PreFlightCheckError("Kontent.ai environment ID not found in the configuration file.")

    headers = {
        "Authorization": f"Bearer {api_key}",
    }
    project_url = f"{base_url.rstrip('/')}/projects/{environment_id}"

    # Check 1: Verify API key against the languages endpoint
    try:
        response = requests.get(f"{project_url}/languages", headers=headers, timeout=10)
        response.raise_for_status()
    except requests.HTTPError as e:
        if e.response.status_code in (401, 403):
            raise PreFlightCheckError("The Management API key is invalid, expired or lacks permissions.")
        else:
            raise PreFlightCheckError(f"Unexpected error while checking the languages endpoint: {e}")
    except requests.RequestException as e:
        raise PreFlightCheckError(f"Network error while connecting to the Management API: {e}")

    # Check 2: Verify the target content type exists
    try:
        response = requests.get(f"{project_url}/types/codename/{type_codename}", headers=headers, timeout=10)
        response.raise_for_status()
    except requests.HTTPError as e:
        if e.response.status_code == 404:
            raise PreFlightCheckError(f"Content type '{type_codename}' does not exist in this environment.")
        else:
            raise PreFlightCheckError(f"Unexpected error while checking content type '{type_codename}': {e}")
    except requests.RequestException as e:
        raise PreFlightCheckError(f"Network error while connecting to the Management API: {e}")

    print("[INFO] Pre-flight checks passed successfully.")
