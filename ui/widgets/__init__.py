from ui.widgets.timing_debug_panel import TimingDebugPanel

__all__ = ["TimingDebugPanel"]
