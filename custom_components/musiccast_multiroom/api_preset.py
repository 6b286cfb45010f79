"""List and recall stored net/usb preset slots."""

from __future__ import annotations

from .const import (
    API_ENDPOINT_PRESET_INFO,
    API_ENDPOINT_RECALL_PRESET,
    PRESET_IDENTIFIER_BASE,
    PRESET_INPUTS,
)
from .models import PresetInfo


class PresetAPI:  # mix-in
    """List and recall device presets."""

    async def get_preset_info(self, host: str) -> PresetInfo:  # type: ignore[override]
        """Return the usable presets from getPresetInfo.

        Slots are numbered on the raw list *before* filtering, so a preset keeps
        its slot number (``preset_id``, 1-based) and exposed ``identifier``
        (``200 + index``) no matter which other slots are empty. Only
        server/net_radio presets with a name are kept.
        """
        info = PresetInfo.model_validate(await self._request(host, API_ENDPOINT_PRESET_INFO))  # type: ignore[attr-defined]
        regex = self.preset_info_regex  # type: ignore[attr-defined]

        for index, preset in enumerate(info.preset_info):
            preset.preset_id = index + 1
            preset.identifier = PRESET_IDENTIFIER_BASE + index
            preset.display_text = preset.text
            if regex is not None:
                preset.display_text = regex.sub("", preset.display_text).strip()

        info.preset_info = [
            preset for preset in info.preset_info if preset.input in PRESET_INPUTS and preset.text != ""
        ]
        return info

    async def recall_preset(self, host: str, preset: int) -> None:  # type: ignore[override]
        """Recall preset slot *preset* (1-based) into the current zone."""
        if preset < 1:
            raise ValueError("Preset number must be 1 or higher")
        endpoint = API_ENDPOINT_RECALL_PRESET.format(zone=self.zone)  # type: ignore[attr-defined]
        await self._request(host, f"{endpoint}{preset}")  # type: ignore[attr-defined]
