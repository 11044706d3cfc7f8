"""Artist-to-artist transitions within listening sessions."""

from collections.abc import Iterable, Sequence

from scrobble_insights.analytics.schemas import (
    Edge,
    NetworkGraph,
    Node,
    Transition,
    TransitionsReport,
    TransitionsSummary,
)
from scrobble_insights.analytics.sessions import SessionDetector
from scrobble_insights.constants import (
    DEFAULT_SESSION_GAP_MINUTES,
    DEFAULT_TRANSITION_MIN_COUNT,
    TOP_TRANSITIONS_LIMIT,
)
from scrobble_insights.events import PlayEvent


class TransitionGraph:
    """Stateless transition counting and network construction."""

    @staticmethod
    def analyze(
        events: Iterable[PlayEvent],
        gap_minutes: int = DEFAULT_SESSION_GAP_MINUTES,
        min_count: int = DEFAULT_TRANSITION_MIN_COUNT,
        include_self_transitions: bool = False,
    ) -> TransitionsReport:
        """Count consecutive artist changes inside each session.

        A consecutive pair is retained unless it is a self-transition and
        those are excluded. Retained pairs feed ``total_transitions`` and the
        per-artist appearance counter; ``min_count`` only filters the listed
        transitions.
        """
        pair_counts: dict[tuple[str, str], int] = {}
        appearances: dict[str, int] = {}
        active_sessions = 0

        for session in SessionDetector.detect(events, gap_minutes):
            artists = [t.artist for t in session.tracks]
            retained = 0
            for from_artist, to_artist in zip(artists, artists[1:]):
                if not include_self_transitions and from_artist == to_artist:
                    continue
                key = (from_artist, to_artist)
                pair_counts[key] = pair_counts.get(key, 0) + 1
                appearances[from_artist] = appearances.get(from_artist, 0) + 1
                retained += 1

            appearances[artists[-1]] = appearances.get(artists[-1], 0) + 1
            if retained:
                active_sessions += 1

        total_transitions = sum(pair_counts.values())
        transitions = [
            Transition(
                from_artist=from_artist,
                to_artist=to_artist,
                count=count,
                percentage=count / total_transitions * 100 if total_transitions else 0.0,
            )
            for (from_artist, to_artist), count in pair_counts.items()
            if count >= min_count
        ]
        transitions.sort(key=lambda t: t.count, reverse=True)

        return TransitionsReport(
            transitions=transitions,
            top_transitions=transitions[:TOP_TRANSITIONS_LIMIT],
            network_data=TransitionGraph.network(transitions, appearances),
            summary=TransitionGraph._summarize(transitions, appearances, active_sessions, total_transitions),
        )

    @staticmethod
    def network(transitions: Sequence[Transition], appearances: dict[str, int]) -> NetworkGraph:
        """Nodes for every artist in ``transitions`` (first-appearance order), one edge per transition."""
        node_order: dict[str, None] = {}
        for t in transitions:
            node_order.setdefault(t.from_artist)
            node_order.setdefault(t.to_artist)

        return NetworkGraph(
            nodes=[Node(id=artist, label=artist, size=appearances.get(artist, 0)) for artist in node_order],
            edges=[Edge(source=t.from_artist, target=t.to_artist, weight=t.count) for t in transitions],
        )

    @staticmethod
    def _summarize(
        transitions: Sequence[Transition],
        appearances: dict[str, int],
        active_sessions: int,
        total_transitions: int,
    ) -> TransitionsSummary:
        most_connected = ""
        best = 0
        for artist, count in appearances.items():
            if count > best:
                most_connected, best = artist, count

        return TransitionsSummary(
            total_transitions=total_transitions,
            unique_transitions=len(transitions),
            most_common_transition=transitions[0] if transitions else None,
            most_connected_artist=most_connected,
            avg_transitions_per_session=total_transitions / active_sessions if active_sessions else 0.0,
        )
