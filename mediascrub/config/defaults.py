"""Default configuration values for mediascrub."""

from pathlib import Path

# Default configuration dictionary
DEFAULT_CONFIG = {
    # Metadata stripping
    "sanitize": {
        "strip_mime_types": ["image/jpeg", "image/png"],
        "max_bytes": 0,  # 0 disables the limit
    },
    
    # Upload front
    "upload": {
        "path_prefix": "media/{identity_id}/",
        "max_file_count": 10,
        "accepted_types": ["image/*"],
    },
    
    # Object store
    "storage": {
        "backend": "local",
        "local": {
            "root_dir": str(Path.home() / ".mediascrub" / "store"),
        },
        "http": {
            "base_url": "",
            "timeout": 30,
        },
    },
    
    # Identity used by the CLI when none is given on the command line
    "identity": {
        "identity_id": "",
        "username": "",
    },
    
    # Logging Configuration
    "logging": {
        "level": "INFO",
        "file": "",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
}

# Environment variable naming a config file to load
CONFIG_ENV_VAR = "MEDIASCRUB_CONFIG"
