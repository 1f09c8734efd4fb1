"""Shared test helpers for IntervalBell."""

from intervalbell.timer.driver import DriverMode, WorkoutDriver


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def finish_lead_in(driver: WorkoutDriver) -> None:
    """Start the driver and tick through the lead-in into ACTIVE."""
    driver.start()
    while driver.mode == DriverMode.LEAD_IN:
        driver._on_tick()


def tick(driver: WorkoutDriver, n: int = 1) -> None:
    for _ in range(n):
        driver._on_tick()


def run_to_completion(driver: WorkoutDriver, limit: int = 10_000) -> int:
    """Tick until the run completes; returns the number of engine ticks."""
    count = 0
    while driver.mode == DriverMode.ACTIVE and count < limit:
        driver._on_tick()
        count += 1
    return count
