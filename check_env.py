#!/usr/bin/env python3
"""Check the .env file and report which store-location settings are in effect."""

from pathlib import Path
import sys

TEMPLATE = """# Supabase (required for store warehouse lookups)
# Dashboard -> Project -> Settings -> API
STOREGEO_SUPABASE_URL=https://your-project-id.supabase.co
STOREGEO_SUPABASE_KEY=your-anon-or-service-key

# Reverse geocoding (Nominatim-compatible)
STOREGEO_GEOCODER_BASE_URL=https://nominatim.openstreetmap.org
STOREGEO_GEOCODER_USER_AGENT=storegeo/0.1.0 (ops@example.com)
# STOREGEO_DEFAULT_COUNTRY=India

# Proximity filter
STOREGEO_DEFAULT_MAX_DISTANCE_KM=50
# JSON array or comma-separated
STOREGEO_RADIUS_OPTIONS_KM=10,25,50,100
"""


def _mask(value: str, keep: int = 12) -> str:
    if len(value) <= keep * 2:
        return value
    return f"{value[:keep]}...{value[-6:]}"


def main() -> int:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    if not env_file.exists():
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"Created template .env at {env_file}; fill in the Supabase credentials and rerun.")
        return 1

    print(f"Using {env_file}")
    sys.path.insert(0, str(project_root / "src"))
    try:
        from storegeo.config import settings
    except Exception as e:
        print(f"Error loading config: {e}")
        return 1

    rows = [
        ("supabase_url", settings.supabase_url),
        ("supabase_key", _mask(settings.supabase_key) if settings.supabase_key else None),
        ("geocoder_base_url", settings.geocoder_base_url),
        ("default_country", settings.default_country),
        ("default_max_distance_km", settings.default_max_distance_km),
        ("radius_options_km", settings.radius_options_km),
    ]
    for name, value in rows:
        marker = "ok " if value not in (None, "", ()) else "-- "
        print(f"  {marker}{name}: {value}")

    if settings.supabase_url and settings.supabase_key:
        print("Supabase is configured.")
        return 0
    print("Supabase is NOT configured: variables need the STOREGEO_ prefix and no spaces around '='.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
