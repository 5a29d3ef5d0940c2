from __future__ import annotations

import json
import logging

from erp_console.logger import log_action


def test_log_action_emits_one_json_line(caplog) -> None:
    logger = logging.getLogger("erp_console.test")
    with caplog.at_level(logging.INFO, logger="erp_console.test"):
        log_action(logger, "promotions", "approve", "success", "t-1", rows=3)
    payload = json.loads(caplog.records[0].getMessage())
    assert payload["module"] == "promotions"
    assert payload["action"] == "approve"
    assert payload["outcome"] == "success"
    assert payload["trace_id"] == "t-1"
    assert payload["rows"] == 3
