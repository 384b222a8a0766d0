"""Bash script templates for the Stop hook commands.

Placeholders look like ``@@NAME@@`` and are filled by ``render``; every other
``$``/``{`` is bash syntax and passes through untouched. The scripts read the
hook payload (JSON with ``transcript_path``) from stdin and append JSON lines to
``$XDG_DATA_HOME/ccnotify/notifications.log``.
"""

from __future__ import annotations

import re

_PLACEHOLDER = re.compile(r"@@([A-Z_]+)@@")


def render(template: str, **values: str) -> str:
    """Substitute ``@@NAME@@`` placeholders; a missing value is a KeyError."""
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], template).strip() + "\n"


def bash_double_quoted(value: str) -> str:
    """Escape ``value`` for use inside a double-quoted bash string."""
    return re.sub(r'([\\"$`])', r"\\\1", value)


PREAMBLE = r"""
#!/bin/bash
# @@DESCRIPTION@@
TRANSCRIPT=$(jq -r .transcript_path)
XDG_DATA_HOME="${XDG_DATA_HOME:-$HOME/.local/share}"
LOG_DIR="$XDG_DATA_HOME/ccnotify"
LOG_FILE="$LOG_DIR/notifications.log"

mkdir -p "$LOG_DIR"

log_notification() {
  local level="$1"
  local message="$2"
  local details="$3"
  echo "{\"timestamp\":\"$(date -u +%Y-%m-%dT%H:%M:%S.000Z)\",\"level\":\"$level\",\"type\":\"@@TYPE@@\",\"message\":\"$message\",\"details\":$details}" >> "$LOG_FILE"
}
"""

# Last transcript line is the assistant reply; the user prompt is the most
# recent type=user/role=user line whose content is a plain string.
LATEST_MESSAGES = r"""
LATEST_MSG=$(tail -1 "$TRANSCRIPT" | jq -r '.message.content[0].text // empty')

USER_MSG=""
TEMP_FILE=$(mktemp)
tac "$TRANSCRIPT" > "$TEMP_FILE"
while IFS= read -r line; do
  TYPE=$(echo "$line" | jq -r '.type // empty')
  if [ "$TYPE" = "user" ]; then
    ROLE=$(echo "$line" | jq -r '.message.role // empty')
    if [ "$ROLE" = "user" ]; then
      CONTENT=$(echo "$line" | jq -r '.message.content // empty')
      if [ -n "$CONTENT" ] && [ "${CONTENT:0:1}" != "[" ]; then
        USER_MSG="$CONTENT"
        break
      fi
    fi
  fi
done < "$TEMP_FILE"
rm -f "$TEMP_FILE"
"""

DISCORD = r"""
log_notification "INFO" "Starting discord notification" "{\"webhookUrl\":\"@@MASKED_URL@@\",\"transcriptPath\":\"$TRANSCRIPT\"}"

if [ -n "$LATEST_MSG" ]; then
  FORMATTED_MSG=$(echo "$LATEST_MSG" | head -c 1800 | sed 's/"/\\"/g')

  DISCORD_PAYLOAD=$(cat <<EOF
{
  "embeds": [{
    "title": "Claude Code Operation Completed",
    "description": "${USER_MSG:0:200}",
    "color": 5814783,
    "fields": [{
      "name": "Assistant Response",
      "value": "${FORMATTED_MSG:0:1000}",
      "inline": false
    }],
    "timestamp": "$(date -u +%Y-%m-%dT%H:%M:%S.000Z)"
  }]
}
EOF
)

  START_TIME=$(date +%s)
  RESPONSE=$(curl -s -w "\n%{http_code}" --max-time 30 -H "Content-Type: application/json" -d "$DISCORD_PAYLOAD" "@@WEBHOOK_URL@@" 2>&1)
  END_TIME=$(date +%s)
  EXECUTION_TIME=$((END_TIME - START_TIME))

  HTTP_CODE=$(echo "$RESPONSE" | tail -n1)
  RESPONSE_BODY=$(echo "$RESPONSE" | head -n -1)

  if [ "$HTTP_CODE" = "204" ]; then
    log_notification "INFO" "Discord notification sent successfully" "{\"webhookUrl\":\"@@MASKED_URL@@\",\"responseCode\":$HTTP_CODE,\"executionTime\":$EXECUTION_TIME}"
  else
    log_notification "ERROR" "Discord notification failed" "{\"webhookUrl\":\"@@MASKED_URL@@\",\"responseCode\":$HTTP_CODE,\"responseBody\":\"$RESPONSE_BODY\",\"executionTime\":$EXECUTION_TIME,\"error\":\"HTTP $HTTP_CODE\"}"
  fi
else
  log_notification "DEBUG" "Discord notification skipped" "{\"webhookUrl\":\"@@MASKED_URL@@\",\"reason\":\"No assistant message found\"}"
fi
"""

NTFY = r"""
DEFAULT_TOPIC_NAME="@@TOPIC@@"
TOPIC_NAME="${NTFY_TOPIC:-$DEFAULT_TOPIC_NAME}"

log_notification "INFO" "Starting ntfy notification" "{\"topicName\":\"$TOPIC_NAME\",\"transcriptPath\":\"$TRANSCRIPT\"}"

if [ -n "$LATEST_MSG" ]; then
  START_TIME=$(date +%s)
  RESPONSE=$(curl -s -w "\n%{http_code}" --max-time 30 -H "Title: ${USER_MSG:0:100}" -d "$LATEST_MSG" "ntfy.sh/${TOPIC_NAME}" 2>&1)
  END_TIME=$(date +%s)
  EXECUTION_TIME=$((END_TIME - START_TIME))

  HTTP_CODE=$(echo "$RESPONSE" | tail -n1)
  RESPONSE_BODY=$(echo "$RESPONSE" | head -n -1)

  if [ "$HTTP_CODE" = "200" ]; then
    log_notification "INFO" "Ntfy notification sent successfully" "{\"topicName\":\"$TOPIC_NAME\",\"responseCode\":$HTTP_CODE,\"executionTime\":$EXECUTION_TIME}"
  else
    log_notification "ERROR" "Ntfy notification failed" "{\"topicName\":\"$TOPIC_NAME\",\"responseCode\":$HTTP_CODE,\"responseBody\":\"$RESPONSE_BODY\",\"executionTime\":$EXECUTION_TIME,\"error\":\"HTTP $HTTP_CODE\"}"
  fi
else
  log_notification "DEBUG" "Ntfy notification skipped" "{\"topicName\":\"$TOPIC_NAME\",\"reason\":\"No assistant message found\"}"
fi
"""

MACOS = r"""
MAIN_TITLE="@@TITLE@@"

log_notification "INFO" "Starting macOS notification" "{\"title\":\"$MAIN_TITLE\",\"transcriptPath\":\"$TRANSCRIPT\"}"

if [ -n "$LATEST_MSG" ]; then
  SUBTITLE="${USER_MSG:0:256}"
  NOTIFICATION_BODY="${LATEST_MSG:0:1000}"

  ESCAPED_MAIN_TITLE=$(echo "$MAIN_TITLE" | sed 's/"/\\"/g')
  ESCAPED_SUBTITLE=$(echo "$SUBTITLE" | sed 's/"/\\"/g')
  ESCAPED_BODY=$(echo "$NOTIFICATION_BODY" | sed 's/"/\\"/g')

  START_TIME=$(date +%s)
  afplay /System/Library/Sounds/Pop.aiff &
  osascript -e "display notification \"$ESCAPED_BODY\" with title \"$ESCAPED_MAIN_TITLE\" subtitle \"$ESCAPED_SUBTITLE\""
  OSASCRIPT_STATUS=$?
  END_TIME=$(date +%s)
  EXECUTION_TIME=$((END_TIME - START_TIME))

  if [ $OSASCRIPT_STATUS -eq 0 ]; then
    log_notification "INFO" "macOS notification sent successfully" "{\"title\":\"$MAIN_TITLE\",\"executionTime\":$EXECUTION_TIME}"
  else
    log_notification "ERROR" "macOS notification failed" "{\"title\":\"$MAIN_TITLE\",\"executionTime\":$EXECUTION_TIME,\"error\":\"osascript command failed\"}"
  fi
else
  log_notification "DEBUG" "macOS notification skipped" "{\"title\":\"$MAIN_TITLE\",\"reason\":\"No assistant message found\"}"
fi
"""

# Standalone script written to the data directory for manual use.
NTFY_STANDALONE = r"""
#!/bin/bash
DEFAULT_TOPIC_NAME="@@TOPIC@@"
TOPIC_NAME="${NTFY_TOPIC:-$DEFAULT_TOPIC_NAME}"

TRANSCRIPT=$(jq -r .transcript_path)
@@LATEST_MESSAGES@@
if [ -n "$LATEST_MSG" ]; then
  echo "$LATEST_MSG" | sed 's/^/ /' | head -c 500 | \
  curl -H "Title: ${USER_MSG:0:100}" -d @- "ntfy.sh/${TOPIC_NAME}"
fi
"""
