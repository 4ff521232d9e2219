# footprint_engine/audit.py
# Append-only run/event records. Kept in memory by the caller; nothing is written to disk.

import json
import uuid
from datetime import datetime, timezone

from . import FOOTPRINT_ENGINE_VERSION


def make_audit_record(event_type: str, payload: dict, run_id: str = None) -> dict:
    return {
        "run_id": run_id or str(uuid.uuid4()),
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "engine_version": str(FOOTPRINT_ENGINE_VERSION),
        "event_type": event_type,
        "payload": payload,
    }


def summarize_run(run: dict) -> dict:
    fp = run.get("footprint", {})
    return {
        "total_t": fp.get("total"),
        "per_person_t": fp.get("per_person"),
        "tier": fp.get("tier", {}).get("code"),
        "bonus": run.get("survey", {}).get("bonus"),
        "avoided_kg": run.get("walking", {}).get("avoided_kg"),
    }


def make_run_record(run: dict, run_id: str = None) -> dict:
    payload = {
        "inputs": run.get("inputs", {}),
        "summary": summarize_run(run),
    }
    return make_audit_record("FOOTPRINT_RUN", payload, run_id=run_id)


def records_to_jsonl(records) -> str:
    return "".join(json.dumps(r, ensure_ascii=False) + "\n" for r in records)
