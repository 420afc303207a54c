# Main.py
""" Entry point for the Precision Calculator.

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Load configuration, set up logging and start the Qt GUI

"""
import logging
import sys
from pathlib import Path

from Calculator import config_manager as config_manager, UI as UI
from Calculator import error as E


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent

logger = logging.getLogger(__name__)


def required_files(project_root=PROJECT_ROOT):
    package_dir = project_root / "Calculator"
    return [
        package_dir / "UI.py",
        package_dir / "StateMachine.py",
        package_dir / "MathEngine.py",
        package_dir / "Display.py",
        package_dir / "KeyBindings.py",
        package_dir / "Background.py",
        package_dir / "config_manager.py",
        package_dir / "error.py",
        project_root / "config.json",
        project_root / "ui_strings.json",
    ]


def check_files_exist(project_root=PROJECT_ROOT):

    """
      Fail fast in development if required files are missing / moved / renamed.

      In production (.exe) files are embedded by the bundler, so this check is skipped.
    """

    missing_files = [path.name for path in required_files(project_root) if not path.exists()]

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {E.message_for('1000')}{file_name}")
        sys.exit(1)


def setup_logging(all_settings):
    level = logging.DEBUG if all_settings.get("debug_logging") else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():

    """
    Load configuration and start the GUI.
    - Keep this thin: no business logic here.
    """

    all_settings = config_manager.load_setting_value("all")
    setup_logging(all_settings)
    logger.info("Config loaded: %s", all_settings)

    # Delegate control to the UI layer; the UI owns the event loop.
    UI.main()


def run():
    # Two explicit modes aid debugging & packaging clarity.
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        print("Developer Mode: Checking file paths...")
        check_files_exist()
    else:
        print("Production mode (.exe) is starting...")
    main()


if __name__ == "__main__":
    run()
