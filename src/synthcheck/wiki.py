import logging
import sys
from dataclasses import dataclass

import mwclient
import requests
from mwclient.errors import APIError, LoginError, MwClientError
from tqdm import tqdm

from . import config
from .errors import LoginFailedError, WikiUnavailableError
from .extract import apply_wiki_page

logger = logging.getLogger(__name__)


@dataclass
class WikiStats:
    pages_listed: int = 0
    pages_missing: int = 0
    pages_matched: int = 0
    pages_unmatched: int = 0


def strip_category_prefix(name):
    name = (name or "").strip()
    if name.lower().startswith(config.CATEGORY_PREFIX.lower()):
        name = name[len(config.CATEGORY_PREFIX):]
    return name.strip()


class WikiClient:
    """Read-only access to the LifeWiki through mwclient. Nothing is ever edited."""

    def __init__(self, host=config.WIKI_HOST, path=config.WIKI_PATH, scheme=config.WIKI_SCHEME, site=None):
        self.host = host
        self.path = path
        self.scheme = scheme
        self._site = site
        self.logged_in = False

    @property
    def site(self):
        """Lazy initializer for the MediaWiki client."""
        if self._site is None:
            self._site = mwclient.Site(
                self.host,
                path=self.path,
                scheme=self.scheme,
                clients_useragent=config.HEADERS["User-Agent"],
            )
        return self._site

    def login(self, username, password):
        logger.info("[*] Logging in to %s as %s...", self.host, username)
        try:
            self.site.login(username, password)
        except (LoginError, APIError) as exc:
            raise LoginFailedError("LOGIN_FAILED", f"Login failed for {username}.", {"error": str(exc)}) from exc
        except (MwClientError, requests.exceptions.RequestException) as exc:
            raise LoginFailedError(
                "LOGIN_FAILED",
                f"Could not reach {self.host} to log in as {username}.",
                {"error": str(exc)},
            ) from exc
        self.logged_in = True
        logger.info("[+] Logged in.")

    def logout(self):
        if not self.logged_in:
            return
        logger.info("[*] Logging out...")
        try:
            self.site.post("logout", token=self.site.get_token("csrf"))
        except (MwClientError, requests.exceptions.RequestException) as exc:
            logger.warning("[!] Logout failed: %s", exc)
            return
        finally:
            self.logged_in = False
        logger.info("[+] Logged out.")

    def list_pages_in_category(self, category_name):
        """Return every page title in the category (the listing is continued to the end)."""
        name = strip_category_prefix(category_name)
        try:
            return [page.name for page in self.site.categories[name]]
        except (MwClientError, requests.exceptions.RequestException) as exc:
            raise WikiUnavailableError(
                "CATEGORY_UNAVAILABLE",
                f"Could not list Category:{name} on {self.host}.",
                {"error": str(exc)},
            ) from exc

    def get_page_text(self, title):
        """Return the page's wikitext, or None when it is missing or cannot be fetched."""
        try:
            page = self.site.pages[title]
            if not page.exists:
                return None
            return page.text()
        except (MwClientError, requests.exceptions.RequestException) as exc:
            logger.warning("[!] Failed to read %s: %s", title, exc)
            return None


def collect_wiki_values(store, client, category):
    """Fetch every page in the category and attach its synthesis cost to the record store."""
    stats = WikiStats()
    logger.info("[*] Getting list of wiki pages in %s...", category)
    titles = list(client.list_pages_in_category(category))
    stats.pages_listed = len(titles)
    logger.info("[+] %s articles found.", stats.pages_listed)

    for title in tqdm(titles, desc="Reading wikitext", unit="page", disable=not sys.stderr.isatty()):
        text = client.get_page_text(title)
        # Pages can be deleted between listing and fetching.
        if text is None:
            stats.pages_missing += 1
            logger.warning("[!] %s: page does not exist!", title)
            continue
        if apply_wiki_page(store, title, text):
            stats.pages_matched += 1
        else:
            stats.pages_unmatched += 1
    return stats
