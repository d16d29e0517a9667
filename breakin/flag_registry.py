from typing import Dict


class FlagRegistry:
    """Accounts that triggered a detection; a flag is never cleared during a run."""

    def __init__(self):
        self.flags: Dict[str, bool] = {}

    def is_flagged(self, account: str) -> bool:
        # First lookup registers the account as not flagged
        return self.flags.setdefault(account, False)

    def flag(self, account: str) -> None:
        self.flags[account] = True

    def flagged_accounts(self):
        return sorted(account for account, flagged in self.flags.items() if flagged)
