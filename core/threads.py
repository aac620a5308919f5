# core/threads.py
import logging

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

log = logging.getLogger(__name__)

class DraftLoadWorkerSignals(QObject):
    loaded = Signal(object)
    failed = Signal(str)

class DraftLoadWorker(QRunnable):
    def __init__(self, service):
        super().__init__()
        self.service = service
        self.signals = DraftLoadWorkerSignals()

    def run(self):
        try:
            draft = self.service.resume_latest()
            if draft is None:
                draft = self.service.start_draft()
        except Exception as e:
            log.exception("Loading draft failed")
            self.signals.failed.emit(str(e) or type(e).__name__)
            return
        self.signals.loaded.emit(draft)

class Workers:
    pool = QThreadPool.globalInstance()
