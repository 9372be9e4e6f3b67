from __future__ import annotations

import logging
from dataclasses import dataclass, field

from cup_backend.config import DAY_LABELS, SIDE_LABELS, SINGLES_GROUP_SIZE, TEAM_GROUP_SIZE
from cup_backend.schemas import EventState, FillMode, PairOptions, PlayerId, Pool, Slot
from cup_backend.services.host_service import PairingHost
from cup_backend.services.pairing_config_service import DEFAULT_SETTINGS, PairingSettings
from cup_backend.services.shuffle_service import shuffle

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    assignments: list[list[Slot]]
    short_ozark: int = 0
    short_valley: int = 0


@dataclass
class RoundReport:
    day: str
    side: str
    label: str
    format: str | None
    group_size: int
    is_team: bool
    fill_mode: FillMode
    groups_count: int
    available_ozark: int
    available_valley: int
    short_ozark: int
    short_valley: int
    messages: list[str] = field(default_factory=list)


def label_round(day: str, side: str) -> str:
    return f"{DAY_LABELS.get(day, day)} {SIDE_LABELS.get(side, side)}"


def groups_count(state: EventState) -> int:
    return max(1, int(state.num_groups))


# ---------- Availability ----------

def placed_ids(grid: list[list[Slot]] | None) -> set[PlayerId]:
    return {pid for row in (grid or []) if row for pid in row if pid is not None}


def available_by_team(state: EventState, day: str, side: str) -> tuple[list[PlayerId], list[PlayerId]]:
    """
    Players of each pool not seated anywhere in this round yet, in roster order.
    """
    placed = placed_ids(state.groups.get(day, {}).get(side))
    ozark: list[PlayerId] = []
    valley: list[PlayerId] = []
    for p in state.players:
        if p.id in placed:
            continue
        (valley if p.team == Pool.VALLEY else ozark).append(p.id)
    return ozark, valley


# ---------- Builders ----------

def _second_seed(seed: int | None) -> int | None:
    # the two pools must not be permuted in lockstep
    return None if seed is None else int(seed) + 1


def _pairs(ids: list[PlayerId]) -> list[list[PlayerId]]:
    return [ids[i:i + 2] for i in range(0, len(ids), 2)]


def build_assignments_team(
    ozark_ids: list[PlayerId],
    valley_ids: list[PlayerId],
    groups_count: int,
    seed: int | None = None,
) -> BuildResult:
    """
    2v2 groups: slots 0-1 take the next Ozark pair, slots 2-3 the next Valley pair.

    A trailing single player only fills the first slot of the pair. Shortage
    per pool is the number of that pool's slots left empty.
    """
    pairs_a = _pairs(shuffle(ozark_ids, seed))
    pairs_b = _pairs(shuffle(valley_ids, _second_seed(seed)))

    assignments = blank_grid(groups_count, TEAM_GROUP_SIZE)
    short_a = 0
    short_b = 0

    for g in range(groups_count):
        pair_a = pairs_a[g] if g < len(pairs_a) else []
        pair_b = pairs_b[g] if g < len(pairs_b) else []

        assignments[g][0:len(pair_a)] = pair_a
        short_a += 2 - len(pair_a)

        assignments[g][2:2 + len(pair_b)] = pair_b
        short_b += 2 - len(pair_b)

    return BuildResult(assignments=assignments, short_ozark=short_a, short_valley=short_b)


def build_assignments_singles(
    ozark_ids: list[PlayerId],
    valley_ids: list[PlayerId],
    groups_count: int,
    seed: int | None = None,
) -> BuildResult:
    a = shuffle(ozark_ids, seed)
    b = shuffle(valley_ids, _second_seed(seed))

    assignments = blank_grid(groups_count, SINGLES_GROUP_SIZE)
    for g in range(groups_count):
        if g < len(a):
            assignments[g][0] = a[g]
        if g < len(b):
            assignments[g][1] = b[g]

    return BuildResult(
        assignments=assignments,
        short_ozark=max(0, groups_count - len(a)),
        short_valley=max(0, groups_count - len(b)),
    )


# ---------- Merge / apply ----------

def blank_grid(groups_count: int, size: int) -> list[list[Slot]]:
    return [[None] * size for _ in range(groups_count)]


def normalize_row(row: list[Slot] | None, size: int) -> list[Slot]:
    row = list(row or [])[:size]
    row.extend([None] * (size - len(row)))
    return row


def reset_round_grid(state: EventState, day: str, side: str, groups_count: int, size: int) -> list[list[Slot]]:
    grid = blank_grid(groups_count, size)
    state.groups.setdefault(day, {})[side] = grid
    return grid


def ensure_round_grid(state: EventState, day: str, side: str, groups_count: int, size: int) -> list[list[Slot]]:
    """
    Bring the round's grid to groups_count rows of size slots, keeping whatever
    fits. A missing grid is created empty.
    """
    day_groups = state.groups.setdefault(day, {})
    current = day_groups.get(side) or []
    grid = [normalize_row(row, size) for row in current[:groups_count]]
    grid.extend(blank_grid(groups_count - len(grid), size))
    day_groups[side] = grid
    return grid


def apply_assignments(
    grid: list[list[Slot]],
    assignments: list[list[Slot]],
    fill_mode: FillMode,
    size: int,
) -> None:
    fill_unassigned = fill_mode == FillMode.UNASSIGNED
    for g in range(len(grid)):
        row = grid[g] = normalize_row(grid[g], size)
        built = assignments[g] if g < len(assignments) else []
        for i in range(size):
            target = built[i] if i < len(built) else None
            if fill_unassigned:
                if row[i] is None:
                    row[i] = target
            else:
                row[i] = target


# ---------- Orchestration ----------

def shortage_messages(report: RoundReport) -> list[str]:
    msgs = []
    if report.is_team:
        if report.short_ozark:
            msgs.append(f"Ozark short by {report.short_ozark} slot(s) on {report.label}.")
        if report.short_valley:
            msgs.append(f"Valley short by {report.short_valley} slot(s) on {report.label}.")
    else:
        need = report.groups_count
        if report.available_ozark < need:
            msgs.append(f"Ozark has only {report.available_ozark} available for singles on {report.label} (need {need}).")
        if report.available_valley < need:
            msgs.append(f"Valley has only {report.available_valley} available for singles on {report.label} (need {need}).")
    return msgs


def pair_round(
    state: EventState,
    host: PairingHost,
    day: str,
    side: str,
    options: PairOptions | None = None,
    settings: PairingSettings | None = None,
) -> RoundReport | None:
    settings = settings or DEFAULT_SETTINGS
    options = options or PairOptions()
    fill_mode = options.fill_mode or settings.default_fill_mode
    label = label_round(day, side)

    try:
        fmt = state.format[day][side]
        size = settings.group_size(fmt)
        is_team = settings.is_team_format(fmt) and size == TEAM_GROUP_SIZE
        n = groups_count(state)

        if fill_mode == FillMode.OVERWRITE:
            grid = reset_round_grid(state, day, side, n, size)
        else:
            grid = ensure_round_grid(state, day, side, n, size)

        # availability is read after the optional reset
        ozark, valley = available_by_team(state, day, side)

        builder = build_assignments_team if is_team else build_assignments_singles
        result = builder(ozark, valley, n, seed=options.seed)
        apply_assignments(grid, result.assignments, fill_mode, size)

        report = RoundReport(
            day=day,
            side=side,
            label=label,
            format=fmt,
            group_size=size,
            is_team=is_team,
            fill_mode=fill_mode,
            groups_count=n,
            available_ozark=len(ozark),
            available_valley=len(valley),
            short_ozark=result.short_ozark,
            short_valley=result.short_valley,
        )
        report.messages = shortage_messages(report)
    except Exception as exc:
        logger.exception("Auto-pair failed for %s", label)
        host.fail(f"Auto-pair failed for {label}: {exc}")
        return None

    if report.messages:
        host.notify("\n".join(report.messages))

    host.persist()
    host.render()

    logger.info(
        "Paired %s (%s, %s): %d groups of %d, ozark short %d, valley short %d",
        label, fmt, fill_mode.value, n, size, report.short_ozark, report.short_valley,
    )
    return report


def pair_day(
    state: EventState,
    host: PairingHost,
    day: str,
    options: PairOptions | None = None,
    settings: PairingSettings | None = None,
) -> list[RoundReport]:
    settings = settings or DEFAULT_SETTINGS
    reports = []
    for side in settings.sides:
        report = pair_round(state, host, day, side, options=options, settings=settings)
        if report is not None:
            reports.append(report)
    return reports


def pair_all(
    state: EventState,
    host: PairingHost,
    options: PairOptions | None = None,
    settings: PairingSettings | None = None,
) -> list[RoundReport]:
    settings = settings or DEFAULT_SETTINGS
    reports = []
    for day in settings.days:
        reports.extend(pair_day(state, host, day, options=options, settings=settings))
    return reports
