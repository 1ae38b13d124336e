"""
HAProxy Service Control
Lifecycle commands, config validation, status and logs of the local HAProxy unit
through systemctl, journalctl and the haproxy binary.

All calls are blocking and have no timeout; callers needing bounded latency
must wrap them.
"""

import logging
import subprocess
from datetime import datetime
from typing import Callable, List, Optional

from haproxy_admin import config
from haproxy_admin.exceptions import ServiceCommandError, UnknownActionError
from haproxy_admin.models.haproxy import (
    LogEntry, ServiceStatus, ValidationResult, UPTIME_NOT_RUNNING, UPTIME_UNAVAILABLE,
)
from haproxy_admin.utils.haproxy_log_parser import parse_log_output

logger = logging.getLogger("haproxy_admin.service")

LIFECYCLE_ACTIONS = ("start", "stop", "restart", "reload")
SERVICE_ACTIONS = LIFECYCLE_ACTIONS + ("validate",)

ACTIVE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_uptime(started_at: datetime, now: datetime) -> str:
    """Whole days, hours and minutes elapsed since started_at"""
    elapsed = max(int((now - started_at).total_seconds()), 0)
    days, remainder = divmod(elapsed, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes = remainder // 60
    return f"{days}d {hours}h {minutes}m"


def parse_active_timestamp(value: str) -> Optional[datetime]:
    """
    Parse a systemd timestamp such as 'Mon 2024-01-15 10:30:00 UTC'.

    Only the date and time tokens are used, weekday and timezone are ignored.
    Returns None when the value does not have that shape.
    """
    tokens = value.split()
    if len(tokens) < 3:
        return None
    try:
        return datetime.strptime(f"{tokens[1]} {tokens[2]}", ACTIVE_TIMESTAMP_FORMAT)
    except ValueError:
        return None


class HAProxyService:
    """Thin wrapper over the service manager and the haproxy binary"""

    def __init__(
        self,
        service_name: str = config.HAPROXY_SERVICE_NAME,
        config_path: str = config.HAPROXY_CONFIG_FILE_PATH,
        haproxy_bin: str = config.HAPROXY_BIN,
        systemctl_bin: str = config.SYSTEMCTL_BIN,
        journalctl_bin: str = config.JOURNALCTL_BIN,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.service_name = service_name
        self.config_path = config_path
        self.haproxy_bin = haproxy_bin
        self.systemctl_bin = systemctl_bin
        self.journalctl_bin = journalctl_bin
        self.runner = runner
        self.clock = clock

    def _run(self, action: str, args: List[str]) -> subprocess.CompletedProcess:
        """Run a command, only failing when it cannot be launched"""
        logger.debug(f"Running: {' '.join(args)}")
        try:
            return self.runner(args, capture_output=True, encoding="utf-8", errors="replace")
        except OSError as e:
            raise ServiceCommandError(action, f"could not run {args[0]}: {e}") from e

    @staticmethod
    def _output(result: subprocess.CompletedProcess) -> str:
        return ((result.stderr or "").strip() or (result.stdout or "").strip())

    def _systemctl(self, action: str):
        result = self._run(action, [self.systemctl_bin, action, self.service_name])
        if result.returncode != 0:
            message = self._output(result) or f"exit code {result.returncode}"
            raise ServiceCommandError(action, message)

    # Lifecycle

    def start(self):
        self._systemctl("start")

    def stop(self):
        self._systemctl("stop")

    def restart(self):
        self._systemctl("restart")

    def reload(self):
        self._systemctl("reload")

    def validate(self) -> ValidationResult:
        """
        Check the on-disk configuration with `haproxy -c`.

        An invalid configuration is a normal result (valid=False), only a
        failure to launch the binary raises ServiceCommandError.
        """
        result = self._run("validate", [self.haproxy_bin, "-c", "-f", self.config_path])
        output = self._output(result)
        if result.returncode == 0:
            return ValidationResult(valid=True, message=output or "Configuration file is valid")
        return ValidationResult(
            valid=False,
            message=output or f"Configuration check failed with exit code {result.returncode}",
        )

    def run_action(self, action: str) -> Optional[ValidationResult]:
        """Dispatch a lifecycle or validate action by name"""
        if action not in SERVICE_ACTIONS:
            raise UnknownActionError(action)
        return getattr(self, action)()

    # Status

    def _query(self, args: List[str]) -> Optional[str]:
        """stdout of a status query, None when it cannot be run"""
        try:
            result = self._run("query", args)
        except ServiceCommandError as e:
            logger.debug(str(e))
            return None
        return (result.stdout or "").strip()

    def is_running(self) -> bool:
        return self._query([self.systemctl_bin, "is-active", self.service_name]) == "active"

    def is_enabled(self) -> bool:
        return self._query([self.systemctl_bin, "is-enabled", self.service_name]) == "enabled"

    def get_version(self) -> str:
        output = self._query([self.haproxy_bin, "-v"])
        if not output:
            return "unknown"
        return output.splitlines()[0].strip()

    def get_uptime(self) -> str:
        output = self._query([
            self.systemctl_bin, "show", self.service_name,
            "--property=ActiveEnterTimestamp", "--value",
        ])
        if not output:
            return UPTIME_UNAVAILABLE
        # Without --value support the output is 'ActiveEnterTimestamp=...'
        started_at = parse_active_timestamp(output.split("=", 1)[-1])
        if started_at is None:
            return UPTIME_UNAVAILABLE
        return format_uptime(started_at, self.clock())

    def get_status(self) -> ServiceStatus:
        """Each field degrades on its own, this never raises for command failures"""
        running = self.is_running()
        return ServiceStatus(
            running=running,
            enabled=self.is_enabled(),
            version=self.get_version(),
            uptime=self.get_uptime() if running else UPTIME_NOT_RUNNING,
        )

    # Logs

    def get_logs(self, limit: int = config.DEFAULT_LOG_LIMIT) -> List[LogEntry]:
        """Most recent journal lines of the unit, empty on any failure"""
        args = [self.journalctl_bin, "-u", self.service_name, "-n", str(limit), "--no-pager"]
        try:
            result = self._run("read logs", args)
        except ServiceCommandError as e:
            logger.debug(str(e))
            return []
        if result.returncode != 0:
            logger.debug(f"journalctl exited with {result.returncode}: {self._output(result)}")
            return []

        entries = parse_log_output(result.stdout or "", self.clock())
        return [LogEntry(**entry) for entry in entries]
