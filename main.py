"""Main execution script for the Sheets Attendance Grader."""

import sys

from dotenv import load_dotenv

# Environment overrides must be in place before config is imported
load_dotenv()

from utils.error_handler import AuthenticationError, APIError, ConfigError, GradingError

# Environment overrides are validated when config is first imported
try:
    import config
except ConfigError as e:
    print(f"Fatal Error: invalid configuration: {e}", file=sys.stderr)
    sys.exit(1)

from utils.logger import setup_logger
import auth
from services.sheets_api import SheetsService
from core.grader import Grader
import ui.cli as cli

logger = setup_logger()

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

def main() -> int:
    """Runs the grading workflow and returns the process exit status."""
    logger.info("Starting Sheets Attendance Grader.")
    cli.display_welcome(config.SPREADSHEET_ID, config.SHEET_RANGE)

    try:
        # --- Step 1: Authorization ---
        cli.display_step(1, "Authorizing with Google...")
        credentials = auth.get_credentials()
        cli.display_success("Authorization successful.")

        # --- Step 2: Grade and write back ---
        cli.display_step(2, f"Grading range '{config.SHEET_RANGE}'...")
        sheets_service = SheetsService(credentials)
        grader = Grader(sheets_service, config.SPREADSHEET_ID, config.SHEET_RANGE)
        results = grader.run()

        # --- Step 3: Summary ---
        cli.display_step(3, "Summary")
        cli.display_results(results)
        if results:
            cli.display_success(f"Wrote {len(results)} results to columns "
                                f"{config.STATUS_COLUMN} and {config.FINAL_GRADE_COLUMN}.")
        return EXIT_OK

    except FileNotFoundError as e:
        logger.critical(f"Required file not found: {e}. Please ensure {config.CLIENT_SECRETS_FILE} is present.")
        cli.display_error(f"Missing required file: {e}")
    except AuthenticationError as e:
        logger.critical(f"Setup or Authorization Error: {e}", exc_info=config.DEBUG)
        cli.display_error(f"Setup Error: {e}")
    except GradingError as e:
        logger.error(f"Roster could not be graded: {e}", exc_info=config.DEBUG)
        cli.display_error(f"Roster Error: {e}. Nothing was written.")
    except APIError as e:
        logger.error(f"Google API Error: {e}", exc_info=config.DEBUG)
        cli.display_error(f"API Error ({e.service or 'Unknown'}): {e}")
    except KeyboardInterrupt:
        logger.info("Operation interrupted by user (Ctrl+C).")
        cli.display_warning("Operation interrupted.")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"An unexpected error occurred: {e}", exc_info=True)
        cli.display_error(f"An unexpected error occurred: {e}. Check logs for details.")
    finally:
        cli.display_farewell()
    return EXIT_FAILURE

def run():
    """Console script entry point."""
    sys.exit(main())

if __name__ == "__main__":
    run()
