"""Flask application factory for the mediascrub upload API."""

import logging
from typing import Optional

from flask import Flask

from ..config import ConfigManager
from ..storage import ObjectStore
from ..upload import UploadService

logger = logging.getLogger(__name__)


def create_app(
    config_path: str = None,
    config: Optional[ConfigManager] = None,
    store: Optional[ObjectStore] = None,
    debug: bool = False
) -> Flask:
    """Create and configure the Flask application.
    
    Args:
        config_path: Optional path to mediascrub config file
        config: Already-loaded configuration (takes precedence over config_path)
        store: Object store to write to (created from config if not provided)
        debug: Enable debug mode
        
    Returns:
        Configured Flask application
    """
    app = Flask(__name__)
    app.config["DEBUG"] = debug
    
    if config is None:
        try:
            config = ConfigManager.load(config_path=config_path)
        except Exception as e:
            logger.error(f"Failed to load mediascrub config: {e}")
            raise
    
    app.config["MEDIASCRUB_CONFIG"] = config
    app.config["UPLOAD_SERVICE"] = UploadService(config, store=store)
    
    from .routes.api import api_bp
    
    app.register_blueprint(api_bp, url_prefix="/api")
    
    logger.info("mediascrub web app created")
    
    return app
