"""Flask application for the FIB Study API."""

from flask import Flask
from flask_cors import CORS
import os
import logging

from fib_study.config import Config
from fib_study.questions import QuestionRepository
from fib_study.review import BatchSubmitter
from fib_study.lookup import WordLookupCache
from fib_study.store import create_store


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(
    store=None,
    translation_service=None,
    image_service=None,
    dictionary_service=None
):
    """
    Create and configure the Flask application.

    Collaborators not passed in are built from configuration. The document
    store is owned by the caller that created the app; call
    `app.config['DOCUMENT_STORE'].close()` on shutdown.
    """
    app = Flask(__name__)

    # Configure CORS for API endpoints
    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST", "PUT"],
            "allow_headers": ["Content-Type"]
        }
    })

    # Configure upload settings
    app.config['MAX_CONTENT_LENGTH'] = Config.MAX_UPLOAD_BYTES

    if store is None:
        store = create_store()
        logger.info(f"Using '{Config.STORE_BACKEND}' document store")

    if translation_service is None:
        from fib_study.lookup.translation_service import GoogleTranslationService
        translation_service = GoogleTranslationService()
    if image_service is None:
        from fib_study.lookup.image_service import UnsplashImageService
        image_service = UnsplashImageService()
        if not image_service.access_key:
            logger.warning("⚠️  UNSPLASH_ACCESS_KEY is not set; image search will fail")
    if dictionary_service is None:
        from fib_study.lookup.dictionary_service import FreeDictionaryService
        dictionary_service = FreeDictionaryService()

    repository = QuestionRepository(store)

    # Store collaborators in app config for access by API endpoints
    app.config['DOCUMENT_STORE'] = store
    app.config['QUESTION_REPOSITORY'] = repository
    app.config['BATCH_SUBMITTER'] = BatchSubmitter(repository)
    app.config['TRANSLATION_SERVICE'] = translation_service
    app.config['IMAGE_SERVICE'] = image_service
    app.config['WORD_CACHE'] = WordLookupCache(
        store, translation_service, image_service, dictionary_service
    )

    # Register routes
    from fib_study.web import api
    app.register_blueprint(api.bp)

    return app


if __name__ == '__main__':
    # Security: Use environment variables to control debug mode and host binding
    # Never run with debug=True and host='0.0.0.0' in production
    debug_mode = os.environ.get('FLASK_DEBUG', 'True').lower() == 'true'
    host = '127.0.0.1' if debug_mode else '0.0.0.0'
    port = int(os.environ.get('FLASK_PORT', '3000'))

    app = create_app()

    if debug_mode:
        print("⚠️  WARNING: Running in DEBUG mode - server restricted to localhost")
        print(f"Server: http://localhost:{port}")
    else:
        print(f"Server: http://0.0.0.0:{port}")

    try:
        app.run(debug=debug_mode, host=host, port=port)
    finally:
        app.config['DOCUMENT_STORE'].close()
