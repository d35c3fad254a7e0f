"""
Solution reconciliation.

The optimizer often returns several partitions with the same best score. Most
rooms tend to be identical across them; the rest differ only inside small
clusters of people. This module separates the rooms every partition agrees on
("locked") from those clusters ("swap groups") and lists, per cluster, the
distinct ways its people can be roomed. Picking one configuration per swap
group independently yields every arrangement the partitions represent.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence

from networkx.utils import UnionFind

from ..errors import PartitionMismatchError
from ..models import PersonId, ReconciliationResult, Room, RoomPartition, SwapGroup, id_sort_key

logger = logging.getLogger(__name__)


def validate_partitions(partitions: Sequence[RoomPartition]) -> set[PersonId]:
    """Check every partition houses the same people exactly once.

    Returns:
        The shared person id set

    Raises:
        PartitionMismatchError: On a duplicated person or a differing person set
    """
    expected: set[PersonId] | None = None

    for index, partition in enumerate(partitions):
        counts = Counter(partition.person_ids())
        duplicated = {pid for pid, count in counts.items() if count > 1}
        if duplicated:
            raise PartitionMismatchError(
                f"partition {index} places {len(duplicated)} people in more than one room",
                expected_ids=expected or (),
                offending_ids=duplicated,
                partition_index=index,
            )

        people = set(counts)
        if expected is None:
            expected = people
        elif people != expected:
            raise PartitionMismatchError(
                f"partition {index} covers a different set of people than partition 0",
                expected_ids=expected,
                offending_ids=people ^ expected,
                partition_index=index,
            )

    return expected or set()


class SolutionReconciler:
    """Reduces tied partitions to locked rooms plus independent swap groups."""

    def reconcile(self, partitions: Sequence[RoomPartition]) -> ReconciliationResult:
        """
        Reconcile candidate partitions.

        Args:
            partitions: Partitions over the same people, usually tied in score

        Returns:
            ReconciliationResult with locked rooms ordered by room key and swap
            groups ordered by their smallest member id

        Raises:
            PartitionMismatchError: If the partitions disagree on who is housed
        """
        if not partitions:
            return ReconciliationResult()
        validate_partitions(partitions)

        room_sets = [[Room.of(members) for members in partition.rooms if members] for partition in partitions]

        locked = set(room_sets[0])
        for rooms in room_sets[1:]:
            locked &= set(rooms)

        swaps = UnionFind()
        for rooms in room_sets:
            for room in rooms:
                if room not in locked:
                    swaps.union(*room.member_ids)

        swap_groups = [self._build_swap_group(members, room_sets, locked) for members in swaps.to_sets()]
        swap_groups.sort(key=lambda group: id_sort_key(group.member_ids[0]))

        result = ReconciliationResult(
            locked_rooms=sorted(locked, key=lambda room: room.sort_key),
            swap_groups=swap_groups,
        )
        logger.info(
            f"Reconciled {len(partitions)} partitions: {len(result.locked_rooms)} locked rooms, "
            f"{len(swap_groups)} swap groups, {result.combination_count} combinations"
        )
        return result

    def _build_swap_group(
        self,
        members: set[PersonId],
        room_sets: list[list[Room]],
        locked: set[Room],
    ) -> SwapGroup:
        configurations: list[list[Room]] = []
        seen: set[tuple[Room, ...]] = set()

        for rooms in room_sets:
            touched = sorted(
                (room for room in rooms if room not in locked and members.intersection(room.member_ids)),
                key=lambda room: room.sort_key,
            )
            # Rooms are sorted sets and the list is sorted by key, so the
            # signature depends on membership only
            signature = tuple(touched)
            if signature not in seen:
                seen.add(signature)
                configurations.append(touched)

        return SwapGroup(member_ids=sorted(members, key=id_sort_key), configurations=configurations)
