from config import config
from models.events import RepEvent, StatusEvent
from utils.logging_utils import logger, setup_logging
from services.replay_service import replay_service

def print_event(event):
    """Echo rep and status events to the console as the replay runs"""
    if isinstance(event, RepEvent):
        marker = " 🎉 milestone" if event.is_milestone else ""
        print(f"[{event.ts / 1000:7.2f}s] rep {event.count}{marker}")
    elif isinstance(event, StatusEvent):
        print(f"[{event.ts / 1000:7.2f}s] {event.text}")

def main(argv=None):
    config.setup_from_args(argv)
    config.validate()
    setup_logging()

    # Display startup information
    print("\n" + "="*60)
    print("Push-up Counter Replay")
    print("="*60)
    print(f"Mode: {config.mode_description}")
    print(f"Recording: {config.frames_path} ({config.layout} layout, {config.fps:g} fps)")
    print(f"Thresholds: down={config.down_angle_deg}°, up={config.up_angle_deg}°, cooldown={config.rep_cooldown_ms:g}ms")
    print("="*60 + "\n")

    recording = replay_service.load(config.frames_path)
    record, _ = replay_service.replay(
        recording,
        fps=config.fps,
        layout=config.layout,
        image_size=config.image_size,
        on_event=print_event,
    )

    logger.info(f"Final record: {record}")
    print(f"\nTotal reps: {record.repCount}  |  Duration: {record.durationSec}s  |  Frames: {record.framesProcessed}")
    return record

if __name__ == "__main__":
    main()
