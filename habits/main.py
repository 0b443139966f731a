"""Main FastAPI application."""

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from fastapi import FastAPI, HTTPException

from .api.models import (
    CheckboxRequest,
    CheckboxUpdate,
    EntryRequest,
    GoalRequest,
    GoalUpdate,
    SettingsUpdate,
    TagRequest,
    TagUpdate,
)
from .config import settings
from .storage.database import HabitDatabase
from .tracking.dates import format_date, get_today_string, parse_date
from .tracking.models import DEFAULT_SETTINGS
from .tracking.tracker import HabitTracker

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Habit Log",
    description="Daily habit tracking with weekly and monthly goal statistics",
    version="1.0.0",
)

# Initialize components
tracker = HabitTracker(
    HabitDatabase(settings.database_path),
    default_settings=replace(
        DEFAULT_SETTINGS, reminder_time=settings.default_reminder_time
    ),
)
tracker.initialize()


def parse_date_param(value: str) -> date:
    """Parse a YYYY-MM-DD request parameter or fail with 400."""
    try:
        return parse_date(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {value!r}")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Habit Log",
        "version": "1.0.0",
        "endpoints": {
            "entries": "/api/entries",
            "settings": "/api/settings",
            "stats": "/api/stats",
            "status": "/status",
        },
    }


@app.get("/status")
async def status():
    """Server status endpoint."""
    return {
        "status": "running",
        "version": "1.0.0",
        "timestamp": datetime.now().isoformat(),
        "today": get_today_string(),
    }


# Entries


@app.get("/api/entries")
async def list_entries(start: Optional[str] = None, end: Optional[str] = None):
    """All entries, optionally limited to an inclusive date range."""
    if start is None and end is None:
        return tracker.entries()

    start_date = format_date(parse_date_param(start)) if start else "0000-00-00"
    end_date = format_date(parse_date_param(end)) if end else "9999-99-99"
    return tracker.get_entries_in_range(start_date, end_date)


@app.get("/api/entries/{entry_date}")
async def get_entry(entry_date: str):
    key = format_date(parse_date_param(entry_date))
    entry = tracker.get_entry(key)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"No entry for {key}")
    return entry


@app.put("/api/entries/{entry_date}")
async def put_entry(entry_date: str, body: EntryRequest):
    """Create or replace the entry for a date."""
    key = format_date(parse_date_param(entry_date))
    existing = tracker.get_entry(key)
    if existing and body.id is None:
        body.id = existing.id

    entry = body.to_entry(key)
    tracker.save_entry(entry)
    return entry


# Settings


@app.get("/api/settings")
async def get_settings():
    return tracker.settings()


@app.patch("/api/settings")
async def patch_settings(body: SettingsUpdate):
    changes = {}
    if body.reminder_time is not None:
        changes["reminder_time"] = body.reminder_time
    if body.fields_enabled is not None:
        changes["fields_enabled"] = body.fields_enabled.to_fields_enabled()
    return tracker.update_settings(**changes)


@app.post("/api/tags")
async def create_tag(body: TagRequest):
    return tracker.add_tag(body.to_tag())


@app.patch("/api/tags/{tag_id}")
async def patch_tag(tag_id: str, body: TagUpdate):
    return tracker.update_tag(tag_id, **body.model_dump(exclude_none=True))


@app.delete("/api/tags/{tag_id}")
async def remove_tag(tag_id: str):
    return tracker.delete_tag(tag_id)


@app.post("/api/checkboxes")
async def create_checkbox(body: CheckboxRequest):
    return tracker.add_custom_checkbox(body.to_checkbox())


@app.patch("/api/checkboxes/{checkbox_id}")
async def patch_checkbox(checkbox_id: str, body: CheckboxUpdate):
    return tracker.update_custom_checkbox(checkbox_id, **body.model_dump(exclude_none=True))


@app.delete("/api/checkboxes/{checkbox_id}")
async def remove_checkbox(checkbox_id: str):
    return tracker.delete_custom_checkbox(checkbox_id)


@app.post("/api/goals")
async def create_goal(body: GoalRequest):
    return tracker.add_goal(body.to_goal())


@app.patch("/api/goals/{goal_id}")
async def patch_goal(goal_id: str, body: GoalUpdate):
    # exclude_unset so a target can be cleared with an explicit null
    return tracker.update_goal(goal_id, **body.model_dump(exclude_unset=True))


@app.delete("/api/goals/{goal_id}")
async def remove_goal(goal_id: str):
    return tracker.delete_goal(goal_id)


# Statistics


@app.get("/api/stats")
async def stats(start: Optional[str] = None, end: Optional[str] = None):
    """Statistics over all entries, or an inclusive date range."""
    start_date = format_date(parse_date_param(start)) if start else None
    end_date = format_date(parse_date_param(end)) if end else None
    return tracker.stats(start_date, end_date)


@app.get("/api/stats/week")
async def week_stats(day: Optional[str] = None):
    """Statistics for the Sunday-Saturday week containing day (default today)."""
    target = parse_date_param(day) if day else date.today()
    return tracker.week_stats(target)


@app.get("/api/stats/month")
async def month_stats(month: Optional[str] = None):
    """Statistics for a calendar month given as YYYY-MM (default this month)."""
    if month is None:
        today = date.today()
        return tracker.month_stats(today.year, today.month - 1)

    try:
        parsed = datetime.strptime(month, "%Y-%m")
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid month: {month!r}")
    return tracker.month_stats(parsed.year, parsed.month - 1)


@app.delete("/api/data")
async def clear_data():
    """Remove all entries and settings."""
    logger.warning("Clearing all stored data")
    tracker.clear_all()
    return {"status": "success", "message": "All data cleared"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
