# status_text.py
from models.events import StatusCode
from models.position_gate import GateReason

POSTURE_MESSAGES = {
    GateReason.NO_SUBJECT: "No one in view",
    GateReason.INCOMPLETE_BODY: "Can't see full body",
    GateReason.NOT_HORIZONTAL: "Body not horizontal - lie flat!",
    GateReason.HANDS_TOO_HIGH: "Hands too high - get on the floor!",
    GateReason.STANDING: "You're standing! Lie down for pushups",
}

MILESTONE_MESSAGES = [
    "Beast mode on! 🐯",
    "Unstoppable! 🔥",
    "Keep pushing! 💪",
    "Shine bright! ✨",
    "Legendary! 🌟",
]

def posture_text(reason: GateReason) -> str:
    return POSTURE_MESSAGES.get(reason, "Get into pushup position")

def get_status_text(code: StatusCode, **details) -> str:
    """
    Build the human-readable line shown for a status code.
    details carries the values each code needs: progress/threshold for
    LOCKING_IN, reason for BAD_POSTURE and COUNTING_PAUSED, count and
    milestone ordinal for REP.
    """
    if code == StatusCode.WAITING:
        return "Get into pushup position..."
    if code == StatusCode.LOCKING_IN:
        return f"Detecting pose... ({details['progress']}/{details['threshold']})"
    if code == StatusCode.BAD_POSTURE:
        return f"🔎 {posture_text(details['reason'])}"
    if code == StatusCode.READY:
        return "✅ GO! Start pushing!"
    if code == StatusCode.GOOD_DEPTH:
        return "⬇️ Good depth!"
    if code == StatusCode.REP:
        return get_rep_text(details["count"], details.get("milestone", 0))
    if code == StatusCode.COUNTING_PAUSED:
        return f"⚠️ {posture_text(details['reason'])}"
    if code == StatusCode.STOPPED:
        return f"Workout finished: {details['count']} reps"
    raise ValueError(f"Unknown status code: {code}")

def get_rep_text(rep_count: int, milestone: int = 0) -> str:
    """
    Rep line, with a motivational message on milestone reps.
    milestone is the ordinal of the milestone (1 for the first), 0 for a
    regular rep. Cycles through the messages so consecutive milestones differ.
    """
    text = f"⬆️ Rep {rep_count}!"
    if not milestone:
        return text

    message_index = (milestone - 1) % len(MILESTONE_MESSAGES)
    return f"{text} {MILESTONE_MESSAGES[message_index]}"
