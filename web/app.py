"""
Flask application for the clipboard OCR web service.

The browser page posts the pasted clipboard items as multipart parts together
with the option toggles; the service picks the image, preprocesses it and
returns either the cleaned PNG or the recognized text.
"""

from __future__ import annotations

import argparse
import logging

from flask import Flask, Response, jsonify, request
from pydantic import ValidationError

import config
from clipboard_io import ClipboardItem, item_from_bytes, require_image_from_clipboard
from errors import (
    NoReadingModeEnabledError,
    PreprocessError,
    RecognitionError,
    UnsupportedPasteDataError,
)
from logging_utils import add_logging_args, configure_logging
from preprocessing import DEFAULT_PREPROCESS_OPTIONS, run_preprocess_pipeline
from recognition import DEFAULT_CHARACTER_MODES, OcrReader, run_ocr
from .schemas import (
    CharacterModesOut,
    ConfigResponse,
    ErrorResponse,
    OcrForm,
    OcrResponse,
    PreprocessForm,
    PreprocessOptionsOut,
)

logger = logging.getLogger(__name__)

APPLIED_STEPS_HEADER = "X-Applied-Steps"


def _error(status: int, error: str, detail: str | None = None):
    body = ErrorResponse(error=error, detail=detail)
    return jsonify(body.model_dump()), status


def _pasted_items() -> list[ClipboardItem]:
    """Turn every uploaded part into a clipboard item, in upload order."""
    items = []
    for key in request.files:
        for storage in request.files.getlist(key):
            items.append(item_from_bytes(storage.read(), storage.mimetype, name=storage.filename))
    return items


def create_app(reader: OcrReader | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        reader: OCR engine used for every request. Defaults to cached
                EasyOCR readers chosen per request from the character modes.
    """
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_BYTES

    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        return _error(400, "Invalid form fields", str(exc))

    @app.errorhandler(UnsupportedPasteDataError)
    def _unsupported_paste(exc: UnsupportedPasteDataError):
        return _error(400, UnsupportedPasteDataError.user_message)

    @app.errorhandler(NoReadingModeEnabledError)
    def _no_mode(exc: NoReadingModeEnabledError):
        return _error(400, NoReadingModeEnabledError.user_message)

    @app.errorhandler(PreprocessError)
    def _preprocess_failed(exc: PreprocessError):
        logger.warning("Preprocessing failed: %s", exc)
        return _error(422, PreprocessError.user_message, str(exc))

    @app.errorhandler(RecognitionError)
    def _ocr_failed(exc: RecognitionError):
        logger.warning("OCR failed: %s", exc)
        return _error(502, RecognitionError.user_message, str(exc))

    @app.get('/api/config')
    def get_config():
        """Default toggles and accepted image types."""
        body = ConfigResponse(
            preprocess_options=PreprocessOptionsOut(
                has_background_color=DEFAULT_PREPROCESS_OPTIONS.has_background_color,
                has_table_grid_lines=DEFAULT_PREPROCESS_OPTIONS.has_table_grid_lines,
            ),
            character_modes=CharacterModesOut(**DEFAULT_CHARACTER_MODES.to_dict()),
        )
        return jsonify(body.model_dump())

    @app.post('/api/preprocess')
    def preprocess():
        """Return the preprocessed image as PNG (or the source if no step ran)."""
        form = PreprocessForm.model_validate(request.form.to_dict())
        image = require_image_from_clipboard(_pasted_items())
        result = run_preprocess_pipeline(image, form.to_options())
        response = Response(result.image.data, mimetype=result.image.mime_type)
        response.headers[APPLIED_STEPS_HEADER] = ",".join(result.applied_steps)
        return response

    @app.post('/api/ocr')
    def ocr():
        """Preprocess the pasted image and return the recognized text."""
        form = OcrForm.model_validate(request.form.to_dict())
        image = require_image_from_clipboard(_pasted_items())
        result = run_ocr(image, modes=form.to_modes(), options=form.to_options(), reader=reader)
        body = OcrResponse(**result.to_dict())
        return jsonify(body.model_dump())

    return app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Clipboard OCR web service")
    add_logging_args(parser)
    parser.add_argument("--host", default=config.WEB_HOST, help=f"Bind address (default: {config.WEB_HOST})")
    parser.add_argument("--port", type=int, default=config.WEB_PORT, help=f"Port (default: {config.WEB_PORT})")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the web server."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    app = create_app()

    logger.info("Starting clipboard OCR service...")
    logger.info("POST images to http://%s:%s/api/ocr", args.host, args.port)
    logger.info("Press Ctrl+C to stop")
    app.run(host=args.host, port=args.port, debug=False)
    return 0


if __name__ == '__main__':
    main()
