"""swapmonitor: read-only terminal dashboard for ASB swap states.

Polls the ASB SQLite database, shows the latest state of every swap and
highlights swaps whose state changed since the previous poll.
"""

__version__ = "0.1.0"
__description__ = "Read-only terminal dashboard for ASB atomic swap states"

from swapmonitor.monitor.loop import MonitorLoop
from swapmonitor.cli.app import app as cli

__all__ = ["MonitorLoop", "cli", "__version__"]
