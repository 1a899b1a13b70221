"""Application entry point and setup for the Spelldrill spelling trainer."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from spelldrill.core.settings import Settings, load_settings
from spelldrill.core.words import WordRepository
from spelldrill.ui.main_window import MainWindow


def configure_logging(settings: Settings) -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load settings and words, then open the practice window."""
    settings = load_settings()
    configure_logging(settings)
    app = QApplication(sys.argv)
    app.setApplicationName("Spelldrill")
    app.setApplicationDisplayName("Spelldrill")

    repository = WordRepository()
    if settings.word_list:
        try:
            word_list = repository.get(settings.word_list)
        except KeyError:
            logging.warning(f"Word list not found: {settings.word_list}, using the first one")
            word_list = repository.first()
    else:
        word_list = repository.first()
    logging.info(f"Practising {word_list.name!r} ({len(word_list.words)} words)")

    window = MainWindow(title=word_list.name, words=word_list.words, settings=settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
