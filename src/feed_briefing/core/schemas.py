"""Structured output schemas requested from the model, one per mode.

Written in the OpenAPI subset accepted by Gemini's ``responseSchema``.
"""

from typing import Any

from feed_briefing.core.entities import Sentiment, SourceType

STRING: dict[str, Any] = {"type": "STRING"}
NULLABLE_STRING: dict[str, Any] = {"type": "STRING", "nullable": True}
BOOLEAN: dict[str, Any] = {"type": "BOOLEAN"}
NUMBER: dict[str, Any] = {"type": "NUMBER"}
STRING_LIST: dict[str, Any] = {"type": "ARRAY", "items": STRING}


def _object(properties: dict[str, Any], optional: tuple[str, ...] = ()) -> dict[str, Any]:
    return {
        "type": "OBJECT",
        "properties": properties,
        "required": [name for name in properties if name not in optional],
    }


def _array(items: dict[str, Any]) -> dict[str, Any]:
    return {"type": "ARRAY", "items": items}


IMPORTANT_ITEM_SCHEMA = _object(
    {
        "rss_item_id": STRING,
        "headline": STRING,
        "key_point": STRING,
        "sentiment": {"type": "STRING", "enum": [s.value for s in Sentiment]},
        "action_item": NULLABLE_STRING,
        "source_name": STRING,
        "source_url": STRING,
    },
    optional=("action_item",),
)

REPORT_RESPONSE_SCHEMA = _object(
    {
        "mode": STRING,
        "report_metadata": _object(
            {
                "title": STRING,
                "subtitle": STRING,
                "report_id_hint": STRING,
                "time_window": _object({"start": STRING, "end": STRING}),
            }
        ),
        "embedding": _object(
            {
                "embedding_summary": STRING,
                "embedding_tags": STRING_LIST,
            }
        ),
        "sections": _array(
            _object(
                {
                    "id": STRING,
                    "title": STRING,
                    "summary": STRING,
                    "body_markdown": STRING,
                    "important_items": _array(IMPORTANT_ITEM_SCHEMA),
                }
            )
        ),
        "sources": _array(
            _object(
                {
                    "rss_item_id": STRING,
                    "source_name": STRING,
                    "source_url": STRING,
                    "title": STRING,
                    "published_at": STRING,
                }
            )
        ),
        "channels": _object(
            {
                "email": _object(
                    {
                        "enabled": BOOLEAN,
                        "subject": STRING,
                        "body_html": STRING,
                        "body_text": STRING,
                    }
                ),
                "sms": _object({"enabled": BOOLEAN, "summary_text": STRING}),
                "video_reel": _object(
                    {
                        "enabled": BOOLEAN,
                        "script": STRING,
                        "approx_duration_sec": NUMBER,
                    }
                ),
            }
        ),
    }
)

CHAT_RESPONSE_SCHEMA = _object(
    {
        "mode": STRING,
        "assistant_reply_markdown": STRING,
        "referenced_reports": _array(
            _object({"report_id": STRING, "title": STRING, "timestamp": STRING})
        ),
        "referenced_sources": _array(
            _object(
                {
                    "source_type": {"type": "STRING", "enum": [s.value for s in SourceType]},
                    "source_id": STRING,
                    "source_name": STRING,
                    "source_url": NULLABLE_STRING,
                    "justification": STRING,
                },
                optional=("source_url",),
            )
        ),
        "suggested_profile_updates": _object(
            {
                "should_update": BOOLEAN,
                "new_primary_topics": STRING_LIST,
                "new_secondary_topics": STRING_LIST,
                "notes": STRING,
            }
        ),
    }
)
