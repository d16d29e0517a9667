from typing import Dict, List


class FrequencyTracker:
    """
    Per-account sliding window over recent login attempts.

    The window is event-relative: a violation is reported when failed
    attempts keep arriving less than ``window_seconds`` apart, i.e. when more
    than ``max_close_pairs`` consecutive close pairs are on record. Any
    successful attempt restarts the account's window.
    """

    def __init__(self, window_seconds=20, max_close_pairs=2):
        self.window_seconds = window_seconds
        self.max_close_pairs = max_close_pairs
        self.history: Dict[str, List[int]] = {}  # {account: [timestamps]}

    def report_attempt(self, account, timestamp, failed=True):
        history = self.history.get(account)
        if history is None:
            self.history[account] = [timestamp]
            return False

        history.append(timestamp)
        if not failed:
            # Success resets the window; keep only this attempt
            self.history[account] = [timestamp]
            return False
        if len(history) < 3:
            return False

        close_pairs = 0
        for earlier, later in zip(history, history[1:]):
            if abs(later - earlier) >= self.window_seconds:
                self.history[account] = [history[-1]]
                return False
            close_pairs += 1
            if close_pairs > self.max_close_pairs:
                # Drop the oldest so the same start cannot re-trigger at once
                del history[0]
                return True
        return False

    def timestamps(self, account):
        return list(self.history.get(account, []))
