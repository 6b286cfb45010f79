"""Constants for MusicCast Multiroom tests."""

SERVER_HOST = "192.168.1.20"
CLIENT_HOST = "192.168.1.21"
SECOND_CLIENT_HOST = "192.168.1.22"

# Trimmed-down but realistic Yamaha Extended Control payloads
MOCK_DEVICE_INFO = {
    "response_code": 0,
    "model_name": "RX-V685",
    "destination": "BG",
    "device_id": "AC44F2851234",
    "system_id": "0B587073",
    "system_version": 2.71,
    "api_version": 2.08,
    "netmodule_version": "1820",
    "serial_number": "Y123456AB",
}

MOCK_FEATURES = {
    "response_code": 0,
    "system": {"func_list": ["wired_lan", "wireless_lan", "party_mode"]},
    "zone": [
        {
            "id": "main",
            "func_list": ["power", "volume", "mute", "sound_program", "link_audio_delay"],
            "input_list": ["tv", "hdmi1", "net_radio", "server"],
            "sound_program_list": ["straight", "surr_decoder", "2ch_stereo"],
            "link_audio_delay_list": ["audio_sync", "lip_sync"],
        }
    ],
}

MOCK_STATUS = {
    "response_code": 0,
    "power": "on",
    "sleep": 0,
    "volume": 82,
    "mute": False,
    "max_volume": 161,
    "input": "net_radio",
    "input_text": "Net Radio",
    "distribution_enable": True,
    "sound_program": "straight",
    "link_audio_delay": "audio_sync",
}

MOCK_PLAY_INFO = {
    "response_code": 0,
    "input": "net_radio",
    "playback": "play",
    "repeat": "off",
    "shuffle": "off",
    "play_time": 12,
    "total_time": 0,
    "artist": "",
    "album": "",
    "track": "Radio Paradise",
}

MOCK_PRESET_INFO = {
    "response_code": 0,
    "preset_info": [
        {"input": "net_radio", "text": "Radio Paradise", "preset_id": 1, "identifier": 200, "display_text": "Radio Paradise"},
        {"input": "server", "text": "Jazz Library", "preset_id": 3, "identifier": 202, "display_text": "Jazz Library"},
    ],
    "func_list": ["clear", "move"],
}
