# Role: Optional user profile used only for personalization. It is embedded verbatim (as JSON)
# into the system prompt; unknown fields from the client are ignored, not rejected.

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt


class UserProfile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    role: Optional[str] = None
    skills: Optional[str] = None
    location: Optional[str] = None
    experienceYears: Optional[Union[StrictInt, StrictFloat]] = None
    interests: Optional[str] = None

    def to_prompt_dict(self) -> Dict[str, Any]:
        # Key line: only fields the caller actually filled in end up in the prompt.
        data = self.model_dump(exclude_none=True)
        years = data.get("experienceYears")
        if isinstance(years, float) and years.is_integer():
            data["experienceYears"] = int(years)
        return data
