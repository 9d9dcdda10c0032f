"""Sample Fixtures — a canonical device set and "Focus Mode" policy.

Used by tests and by the demo seeding path in the API. Values mirror a
typical living-room setup; nothing here is read at runtime otherwise.
"""

from attune.core.domain_types import (
    DeviceCommand, DeviceId, DeviceType, Emotion, PolicyId, UserId,
)
from attune.core.environment import (
    DeviceAction, FrictionWindow, Policy, PolicyCondition, SmartDevice, utc_now,
)


def sample_devices(user_id: str = "user-123") -> list[SmartDevice]:
    now = utc_now()
    uid = UserId(user_id)
    return [
        SmartDevice(
            id="1", user_id=uid,
            device_id=DeviceId("light-living-room"),
            device_name="Living Room Light",
            device_type=DeviceType.LIGHT.value,
            state={"brightness": 100, "color": "white", "on": True},
            last_synced_at=now,
        ),
        SmartDevice(
            id="2", user_id=uid,
            device_id=DeviceId("thermostat-main"),
            device_name="Main Thermostat",
            device_type=DeviceType.THERMOSTAT.value,
            state={"temperature": 72, "mode": "auto", "humidity": 45},
            last_synced_at=now,
        ),
        SmartDevice(
            id="3", user_id=uid,
            device_id=DeviceId("speaker-bedroom"),
            device_name="Bedroom Speaker",
            device_type=DeviceType.SPEAKER.value,
            state={"volume": 50, "playing": False, "currentTrack": None},
            last_synced_at=now,
        ),
    ]


def sample_policy(user_id: str = "user-123") -> Policy:
    return Policy(
        id=PolicyId("policy-1"),
        user_id=UserId(user_id),
        policy_name="Focus Mode",
        condition=PolicyCondition(
            emotion_vector={Emotion.FOCUSED.value: 0.7},
            friction_score=FrictionWindow(min=0.3, max=0.8),
        ),
        actions=[
            DeviceAction(
                device_id=DeviceId("light-living-room"),
                command=DeviceCommand.SET_BRIGHTNESS.value,
                parameters={"brightness": 60, "color": "warm"},
            ),
            DeviceAction(
                device_id=DeviceId("speaker-bedroom"),
                command=DeviceCommand.PLAY_PLAYLIST.value,
                parameters={"playlist": "focus-music", "volume": 30},
            ),
            DeviceAction(
                device_id=DeviceId("thermostat-main"),
                command=DeviceCommand.SET_TEMPERATURE.value,
                parameters={"temperature": 70},
            ),
        ],
    )
