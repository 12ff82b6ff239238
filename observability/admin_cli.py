"""Lightweight CLI helpers for inspecting recorded sessions and deviations."""
from __future__ import annotations

import argparse
import sqlite3

from config.settings import settings


def tail_sessions(limit: int = 20) -> None:
    conn = sqlite3.connect(settings.DB_PATH)
    try:
        cursor = conn.cursor()
        cursor.execute(
            """
            SELECT s.created_at, s.id, s.question_id, s.track, s.question_type,
                   s.duration_seconds, s.incomplete, a.overall_score
            FROM interview_sessions s
            LEFT JOIN assessments a ON a.session_id = s.id
            ORDER BY s.created_at DESC
            LIMIT ?
            """,
            (limit,),
        )
        for row in cursor.fetchall():
            ts, session_id, question_id, track, qtype, duration, incomplete, overall = row
            status = "incomplete" if incomplete else "complete"
            print(
                f"[{ts}] {session_id} {track}/{qtype}:{question_id} {duration:.0f}s {status} overall={overall}"
            )
    finally:
        conn.close()


def tail_deviations(limit: int = 20) -> None:
    conn = sqlite3.connect(settings.DB_PATH)
    try:
        cursor = conn.cursor()
        cursor.execute(
            """
            SELECT timestamp, session_id, kind, phase, utterance
            FROM session_deviations
            ORDER BY id DESC
            LIMIT ?
            """,
            (limit,),
        )
        for ts, session_id, kind, phase, utterance in cursor.fetchall():
            print(f"[{ts}] {session_id} {phase} -> {kind} said={utterance!r}")
    finally:
        conn.close()


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--tail-sessions", type=int, help="Show the latest recorded sessions")
    parser.add_argument("--tail-deviations", type=int, help="Show the latest redirects and timeouts")
    args = parser.parse_args()

    if args.tail_sessions:
        tail_sessions(args.tail_sessions)
    if args.tail_deviations:
        tail_deviations(args.tail_deviations)


if __name__ == "__main__":
    main()
