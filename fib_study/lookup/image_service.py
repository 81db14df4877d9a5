"""
Image search service backed by the Unsplash API.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from fib_study.config import Config
from fib_study.errors import ImageSearchError
from fib_study.lookup.services import ImageSearchService
from fib_study.models import ImageResult


class UnsplashImageService(ImageSearchService):
    """
    Searches Unsplash for landscape photos illustrating a word.

    Requires an access key in the UNSPLASH_ACCESS_KEY environment variable.
    """

    def __init__(
        self,
        access_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None
    ):
        self.logger = logging.getLogger(__name__)
        self.access_key = access_key if access_key is not None else Config.UNSPLASH_ACCESS_KEY
        self.session = session or requests.Session()
        self.timeout = timeout or Config.HTTP_TIMEOUT
        self.search_url = f"{Config.UNSPLASH_API_URL.rstrip('/')}/search/photos"

    def search(self, query: str) -> List[ImageResult]:
        """
        Search for images matching a query.

        Args:
            query: Search text

        Returns:
            Up to IMAGE_PAGE_SIZE images, empty when nothing matched

        Raises:
            ImageSearchError: If the key is missing or the request fails
        """
        if not query or not query.strip():
            raise ImageSearchError("Query parameter is required")

        if not self.access_key:
            raise ImageSearchError(
                "Image search is not configured",
                suggested_actions=["Set UNSPLASH_ACCESS_KEY to your Unsplash access key"]
            )

        params = {
            'query': query,
            'per_page': Config.IMAGE_PAGE_SIZE,
            'orientation': Config.IMAGE_ORIENTATION,
            'order_by': Config.IMAGE_ORDER_BY,
        }
        headers = {'Authorization': f"Client-ID {self.access_key}"}

        try:
            response = self.session.get(
                self.search_url, params=params, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            self.logger.error(f"Image search failed for '{query}': {e}")
            raise ImageSearchError("Failed to fetch images", details=str(e)) from e
        except ValueError as e:
            self.logger.error(f"Image search returned invalid JSON for '{query}': {e}")
            raise ImageSearchError("Failed to fetch images", details=str(e)) from e

        if not isinstance(payload, dict):
            self.logger.error(f"Image search returned unexpected payload for '{query}'")
            raise ImageSearchError(
                "Failed to fetch images",
                details=f"Expected a JSON object, got {type(payload).__name__}"
            )

        results = payload.get('results') or []
        if not isinstance(results, list):
            results = []
        if not results:
            self.logger.info(f"No images found for '{query}'")
            return []

        return [self._to_image(item) for item in results if self._image_url(item)]

    @staticmethod
    def _image_url(item: Dict[str, Any]) -> str:
        return (item.get('urls') or {}).get('regular') or ""

    def _to_image(self, item: Dict[str, Any]) -> ImageResult:
        user = item.get('user') or {}
        return ImageResult(
            url=self._image_url(item),
            alt=item.get('alt_description') or item.get('description') or "",
            credit_name=user.get('name') or "",
            credit_link=(user.get('links') or {}).get('html') or "",
            width=item.get('width') or 0,
            height=item.get('height') or 0,
        )

    def close(self) -> None:
        self.session.close()
