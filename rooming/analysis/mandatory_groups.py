"""Mandatory-group analysis.

People joined by effective "must" constraints have to share a room, and the
relation is transitive: A must B and B must C puts A, B and C together. This
module finds those groups, flags the ones no room can hold, and explains every
"must_not" that falls inside a group with the shortest chain of "must" links
that forces the two people together.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

import networkx as nx

from ..models import (
    ConflictLink,
    ConstraintKind,
    EffectiveConstraint,
    HardConflict,
    OversizedGroup,
    Person,
    PersonId,
    RoomCapacity,
    id_sort_key,
)

logger = logging.getLogger(__name__)

EffectiveMap = Mapping[tuple[PersonId, PersonId], EffectiveConstraint]


@dataclass
class MandatoryGroupReport:
    """Result of mandatory-group analysis."""

    oversized_groups: list[OversizedGroup] = field(default_factory=list)
    hard_conflicts: list[HardConflict] = field(default_factory=list)
    components: list[list[PersonId]] = field(default_factory=list)


def build_must_graph(effective: EffectiveMap, people: Iterable[Person] = ()) -> nx.Graph:
    """Undirected graph whose edges are the effective "must" constraints.

    Every person is a node, so people with no must constraints form their own
    single-member component.
    """
    graph = nx.Graph()
    graph.add_nodes_from(person.id for person in people)
    for (subject_id, target_id), constraint in effective.items():
        if constraint.kind is ConstraintKind.MUST:
            graph.add_edge(subject_id, target_id)
    return graph


class MandatoryGroupAnalyzer:
    """Connected components of the must graph plus BFS explanations for hard conflicts."""

    def analyze(
        self,
        effective: EffectiveMap,
        people: Iterable[Person],
        capacity: RoomCapacity,
    ) -> MandatoryGroupReport:
        """Analyze mandatory co-housing for one trip.

        Args:
            effective: Ordered pair -> effective constraint
            people: Everyone on the trip
            capacity: Room configuration; the largest room is the limit

        Returns:
            MandatoryGroupReport with oversized groups, hard conflicts and
            every mandatory-connectivity component (singletons included)
        """
        people = list(people)
        names = {person.id: person.name for person in people}
        max_room_size = capacity.max_room_size

        must_graph = build_must_graph(effective, people)
        component_of: dict[PersonId, int] = {}

        report = MandatoryGroupReport()
        for index, component in enumerate(nx.connected_components(must_graph)):
            members = sorted(component, key=id_sort_key)
            component_of.update(dict.fromkeys(members, index))
            report.components.append(members)
            if len(members) > max_room_size:
                logger.info(f"Mandatory group of {len(members)} exceeds largest room ({max_room_size})")
                report.oversized_groups.append(
                    OversizedGroup(
                        member_ids=members,
                        member_names=[names.get(pid, str(pid)) for pid in members],
                        max_room_size=max_room_size,
                    )
                )

        for (subject_id, target_id), constraint in effective.items():
            if constraint.kind is not ConstraintKind.MUST_NOT:
                continue
            shared = component_of.get(subject_id)
            if shared is None or shared != component_of.get(target_id):
                continue
            conflict = self._explain(subject_id, target_id, effective, must_graph, names)
            if conflict is not None:
                report.hard_conflicts.append(conflict)

        logger.debug(
            f"{len(report.components)} mandatory components, "
            f"{len(report.oversized_groups)} oversized, {len(report.hard_conflicts)} hard conflicts"
        )
        return report

    def _explain(
        self,
        subject_id: PersonId,
        target_id: PersonId,
        effective: EffectiveMap,
        must_graph: nx.Graph,
        names: Mapping[PersonId, str],
    ) -> HardConflict | None:
        """Shortest must chain from subject to target, closed by the must_not link."""
        try:
            path = nx.shortest_path(must_graph, source=subject_id, target=target_id)
        except (nx.NetworkXNoPath, nx.NodeNotFound):
            logger.warning(f"No must path between {subject_id} and {target_id} despite shared group")
            return None

        links: list[ConflictLink] = []
        for x, y in zip(path, path[1:]):
            forward = effective.get((x, y))
            if forward is None or forward.kind is not ConstraintKind.MUST:
                x, y = y, x
            links.append(
                ConflictLink(from_id=x, to_id=y, kind=ConstraintKind.MUST, from_name=names.get(x), to_name=names.get(y))
            )
        links.append(
            ConflictLink(
                from_id=subject_id,
                to_id=target_id,
                kind=ConstraintKind.MUST_NOT,
                from_name=names.get(subject_id),
                to_name=names.get(target_id),
            )
        )
        return HardConflict(links=links)
