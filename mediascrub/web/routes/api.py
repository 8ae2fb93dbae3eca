"""REST API routes for uploads."""

import logging

from flask import Blueprint, current_app, jsonify, request

from ..._version import __version__
from ...exceptions import UploadRejectedError
from ...identity import Identity
from ...processing import UploadFile

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

IDENTITY_HEADER = "X-Identity-Id"
USERNAME_HEADER = "X-User-Name"


@api_bp.route("/health", methods=["GET"])
def health():
    """Liveness check."""
    return jsonify({"status": "ok", "version": __version__})


@api_bp.route("/upload", methods=["POST"])
def upload():
    """Strip metadata from uploaded images and store them.
    
    Request:
        multipart/form-data with one or more ``files`` parts.
        Headers ``X-Identity-Id`` (required) and ``X-User-Name`` (optional)
        carry the identity established by the upstream auth layer.
        
    Returns:
        Batch result with the derived key of every stored file
    """
    identity_id = request.headers.get(IDENTITY_HEADER, "").strip()
    if not identity_id:
        return jsonify({"error": f"Missing '{IDENTITY_HEADER}' header"}), 400
    
    identity = Identity(
        identity_id=identity_id,
        username=request.headers.get(USERNAME_HEADER) or None,
    )
    
    parts = request.files.getlist("files")
    if not parts:
        return jsonify({"error": "No files in request (expected 'files' parts)"}), 400
    
    files = [
        UploadFile(
            name=part.filename or "upload",
            data=part.read(),
            mime_type=part.mimetype or "application/octet-stream",
        )
        for part in parts
    ]
    
    service = current_app.config["UPLOAD_SERVICE"]
    
    try:
        batch = service.upload(files, identity)
    except UploadRejectedError as e:
        logger.warning(f"Upload rejected for {identity_id}: {e}")
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Upload failed for {identity_id}: {e}", exc_info=True)
        return jsonify({"error": str(e)}), 500
    
    return jsonify(batch.to_dict())
