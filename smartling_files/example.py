"""
Example usage of the Smartling Files API client.

Runs every file operation against a real project:

    smartling-files-example --project-id=PROJECT_ID --user-id=USER_IDENTIFIER --secret-key=SECRET_KEY

Options that are not given fall back to the SMARTLING_* environment settings.
"""

import argparse
import logging
import os
import sys
from pprint import pformat
from typing import Any, Callable, List, Optional

from .client import FileApiClient
from .config import Settings
from .errors import SmartlingApiError
from .params import DownloadFileParameters, ListFilesParameters
from .types import RetrievalType, TranslationState

logger = logging.getLogger(__name__)

FILE_NAME = "test.xml"
NEW_FILE_NAME = "new_test_file.xml"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smartling-files-example",
        description="Exercise the Smartling Files API with a test file.",
    )
    parser.add_argument("--project-id", help="Smartling project id")
    parser.add_argument("--user-id", help="API user identifier")
    parser.add_argument("--secret-key", help="API user secret")
    parser.add_argument("--file", default="tests/resources/test.xml", help="Local file to upload")
    parser.add_argument("--file-type", default="xml", help="Smartling file type")
    parser.add_argument("--locale", default="ru-RU", help="Target locale")
    return parser


def reset_files(client: FileApiClient, files: List[str]) -> None:
    """Delete leftovers of a previous run; missing files are not an error here."""
    for file_uri in files:
        try:
            client.delete_file(file_uri)
        except SmartlingApiError as e:
            logger.debug(f"Skipping cleanup of {file_uri}: {e.message}")


def run_step(title: str, action: Callable[[], Any]) -> Any:
    print(f"::: {title} :::")
    try:
        result = action()
    except SmartlingApiError as e:
        print(f"Error happened during {title.lower()}.")
        print(f"Response code: {e.status_code}")
        print(f"Response message: {e.message}")
        print()
        return None

    print(f"{title} result:")
    print(pformat(result))
    print()
    return result


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())

    project_id = args.project_id or settings.project_id
    user_id = args.user_id or settings.user_identifier
    secret_key = args.secret_key or settings.user_secret
    if not (project_id and user_id and secret_key):
        print("Missing required params.", file=sys.stderr)
        return 1

    real_path = os.path.realpath(args.file)
    locale = args.locale

    with FileApiClient.create(
        project_id,
        user_id,
        secret_key,
        base_url=settings.base_url,
        auth_url=settings.auth_url,
        timeout=settings.timeout,
    ) as client:
        reset_files(client, [FILE_NAME, NEW_FILE_NAME])

        run_step("File Upload", lambda: client.upload_file(real_path, FILE_NAME, args.file_type))
        run_step(
            "File Download",
            lambda: client.download_file(
                FILE_NAME, locale, DownloadFileParameters(retrieval_type=RetrievalType.PSEUDO)
            ),
        )
        run_step("Get File Status", lambda: client.get_status(FILE_NAME, locale))
        run_step("Get File Authorized Locales", lambda: client.get_authorized_locales(FILE_NAME))
        run_step(
            "List Files",
            lambda: client.get_list(
                ListFilesParameters(file_types=[args.file_type], uri_mask="test", limit=5)
            ),
        )
        run_step(
            "File Import",
            lambda: client.import_file(
                locale, FILE_NAME, args.file_type, real_path, TranslationState.PUBLISHED, True
            ),
        )
        run_step("Rename File", lambda: client.rename_file(FILE_NAME, NEW_FILE_NAME))
        run_step("File Deletion", lambda: client.delete_file(NEW_FILE_NAME))

    return 0


if __name__ == "__main__":
    sys.exit(main())
