"""Pending pairing requests held by the adapter between host calls."""

from typing import Literal, Optional, Union

from pydantic import BaseModel

from ..gateway.models import DeviceDescription


class PendingPair(BaseModel):
    """A device waiting for ``start_pairing`` to be added."""

    kind: Literal["pair"] = "pair"
    device_id: str
    description: DeviceDescription


class PendingUnpair(BaseModel):
    """A device waiting for ``remove_thing`` to be removed."""

    kind: Literal["unpair"] = "unpair"
    device_id: str


PendingRequest = Optional[Union[PendingPair, PendingUnpair]]
