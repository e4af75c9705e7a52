import signal


class CtrlCHandler:
    """
    Turn SIGINT/SIGTERM into a stop flag polled by the UI loop, so the
    window closes and sensor subscriptions are released instead of the
    process dying mid-frame.
    """
    def __init__(self, install: bool = True):
        self.should_stop = False
        self.reason = None
        if install:
            signal.signal(signal.SIGINT, self._signal_handler)
            if hasattr(signal, "SIGTERM"):
                signal.signal(signal.SIGTERM, self._signal_handler)

    def request_stop(self, reason: str) -> None:
        self.should_stop = True
        self.reason = reason

    def _signal_handler(self, sig, frame):
        """Callback executed when Ctrl+C or a termination request arrives"""
        print("\n[INFO] Interrupt signal detected, closing cleanly...")
        self.request_stop(signal.Signals(sig).name)
