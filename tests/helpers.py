import re
import json

EVENT_PATTERN = re.compile(r'event: (\w+)\ndata: ({.*?})\n\n')


def parse_sse_events(body):
    """Return (event_type, data) pairs in stream order."""
    return [(m.group(1), json.loads(m.group(2))) for m in EVENT_PATTERN.finditer(body)]


def assert_sse_event(body, event_type, **expected_data):
    """
    Assert that an SSE event with the given type and expected data exists in the body.
    Checks all occurrences of the event type.
    """
    for ev_type, data in parse_sse_events(body):
        if ev_type != event_type:
            continue
        if all(key in data and data[key] == value for key, value in expected_data.items()):
            return

    assert False, f"No '{event_type}' event found with all expected data: {expected_data} in SSE body:\n{body}"


def collect_tokens(body):
    """Concatenate the content of all token events."""
    return "".join(data["content"] for ev_type, data in parse_sse_events(body) if ev_type == "token")
