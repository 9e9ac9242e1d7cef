"""Turn recording - append-only log of every resolved turn.

The CSV log is the training data for the player reaction model, so its
layout is fixed:

    PlayerHP,EnemyHP,EnemyAction,PlayerAction,Initiator,IsQTE
    10,10,2,1,Player,false

Existing files are only ever appended to.
"""

import csv
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from .errors import PersistenceError
from .types import LOG_HEADER, TurnRecord

logger = logging.getLogger("triad_duel.recording")


class TurnRecorder(ABC):
    """Abstract base class for turn recorders."""

    @abstractmethod
    def append(self, record: TurnRecord) -> None:
        """Append one resolved turn.

        Raises:
            PersistenceError: If the record could not be stored
        """
        pass


class CsvTurnRecorder(TurnRecorder):
    """Appends turn records to a CSV file, creating it with a header if needed."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def append(self, record: TurnRecord) -> None:
        """Append a record as one line of the log."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            write_header = not self.path.exists() or self.path.stat().st_size == 0
            with self.path.open("a", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, lineterminator="\n")
                if write_header:
                    logger.info(f"Creating combat log at {self.path}")
                    writer.writerow(LOG_HEADER)
                writer.writerow(record.to_row())
        except OSError as e:
            raise PersistenceError(f"Failed to append to combat log {self.path}: {e}") from e


class MemoryTurnRecorder(TurnRecorder):
    """Keeps turn records in memory. Used by tests and headless simulation."""

    def __init__(self) -> None:
        self.records: list[TurnRecord] = []

    def append(self, record: TurnRecord) -> None:
        self.records.append(record)

    def clear(self) -> None:
        """Drop all recorded turns."""
        self.records.clear()

    def format_readable(self) -> str:
        """Format the recorded turns in a human-readable format."""
        lines: list[str] = [f"=== Combat Log ({len(self.records)} turns) ==="]

        for number, record in enumerate(self.records, start=1):
            kind = "QTE" if record.was_qte else "direct"
            lines.append(
                f"  Turn {number} [{record.initiator.value}, {kind}]: "
                f"Player {record.player_action.name} vs Enemy {record.enemy_action.name} "
                f"(HP before: Player={record.player_health_before}, Enemy={record.enemy_health_before})"
            )

        return "\n".join(lines)


def read_turn_records(path: str | Path) -> list[TurnRecord]:
    """Load every record from a CSV combat log, in log order.

    Args:
        path: Path of the combat log

    Returns:
        List of TurnRecords (empty if the file holds only a header)

    Raises:
        PersistenceError: If the file cannot be read or has the wrong header
        InvalidActionError: If a row is malformed
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            if reader.fieldnames is None:
                return []
            if tuple(reader.fieldnames) != LOG_HEADER:
                raise PersistenceError(f"Unexpected combat log header in {path}: {reader.fieldnames}")
            return [TurnRecord.from_row(row) for row in reader]
    except OSError as e:
        raise PersistenceError(f"Failed to read combat log {path}: {e}") from e
