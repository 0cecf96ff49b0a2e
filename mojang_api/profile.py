"""Fetches Minecraft profiles and decodes their skin and cape textures.

* https://minecraft.wiki/w/Mojang_API
* https://minecraft.wiki/w/Mojang_API#Query_player's_skin_and_cape

A profile's ``textures`` property value is base64-encoded JSON, eg::

    {
      "timestamp": 1640326151859,
      "profileId": "7a8084cd1f444a159bb1eef8d5b535a1",
      "profileName": "brecert",
      "textures": {
        "SKIN": {
          "url": "http://textures.minecraft.net/texture/b813...",
          "metadata": {"model": "slim"}
        },
        "CAPE": {"url": "http://textures.minecraft.net/texture/..."}
      }
    }
"""
import base64
from collections import namedtuple
import json
import logging
import urllib.parse

from . import util
from .util import (
    DecodeError,
    MalformedPayload,
    MalformedResponse,
    MissingTextures,
    requests_get,
)

logger = logging.getLogger(__name__)

TEXTURES_PROPERTY = 'textures'
SLIM_MODEL = 'slim'

Property = namedtuple('Property', [
    'name',       # str
    'value',      # str, base64
    'signature',  # str, base64, or None if the profile was fetched unsigned
], defaults=[None])

Skin = namedtuple('Skin', [
    'url',    # str
    'model',  # str, eg 'slim', or None for the classic model
], defaults=[None])

Cape = namedtuple('Cape', ['url'])

TextureSet = namedtuple('TextureSet', [
    'skin',  # Skin
    'cape',  # Cape, or None
], defaults=[None])


class Profile(namedtuple('Profile', ['id', 'name', 'properties', 'legacy'],
                         defaults=[False])):
    """A user's public profile.

    Attributes:
      id (str): UUID, without dashes
      name (str): username
      properties (tuple of Property): in the order the service returned them
      legacy (bool): whether this is an unmigrated legacy account
    """
    __slots__ = ()

    def textures(self):
        """Decodes this profile's skin and cape.

        Doesn't make any network requests. See :func:`decode_textures`.

        Returns:
          TextureSet:
        """
        return decode_textures(self.properties)

    def slim_model(self):
        """Returns True if this profile's skin uses the slim ("Alex") model."""
        return self.textures().skin.model == SLIM_MODEL


def fetch(uuid, get_fn=requests_get, signed=False):
    """Fetches a user's profile.

    Args:
      uuid (str): with or without dashes
      get_fn (callable): for making HTTP GET requests
      signed (bool): whether to ask the service to include property
        signatures. They're returned as-is, not verified.

    Returns:
      Profile:

    Raises:
      ValueError: if uuid is empty or not a str
      util.TransportError: if the HTTP request fails
      util.NotFound: if there's no profile for this UUID
      util.MalformedResponse: if the response doesn't look like a profile
      util.RequestFailed: on any other non-200 response
    """
    if not uuid or not isinstance(uuid, str):
        raise ValueError(f'{uuid!r} is not a UUID')

    logger.info(f'Fetching profile for {uuid}')
    url = (f'https://{util.session_host()}/session/minecraft/profile/'
           f'{urllib.parse.quote(uuid, safe="")}')
    if signed:
        url += '?unsigned=false'

    resp = util.get(url, get_fn=get_fn)
    obj = util.json_object(resp, 'id', 'name', 'properties')
    util.check_strings(obj, 'id', 'name')

    if not isinstance(obj['properties'], list):
        raise MalformedResponse(f'Expected properties list, got {obj["properties"]!r}')

    properties = []
    for prop in obj['properties']:
        if (not isinstance(prop, dict)
                or not isinstance(prop.get('name'), str)
                or not isinstance(prop.get('value'), str)
                or not isinstance(prop.get('signature'), (str, type(None)))):
            raise MalformedResponse(f'Invalid property: {prop!r}')
        properties.append(Property(name=prop['name'], value=prop['value'],
                                   signature=prop.get('signature')))

    return Profile(id=obj['id'], name=obj['name'], properties=tuple(properties),
                   legacy=bool(obj.get('legacy', False)))


def decode_textures(properties):
    """Finds and decodes the texture payload in a profile's properties.

    If more than one property is named ``textures``, uses the first.

    Args:
      properties (sequence of Property)

    Returns:
      TextureSet:

    Raises:
      MissingTextures: if no property is named ``textures``
      DecodeError: if its value isn't valid base64
      MalformedPayload: if the decoded value isn't JSON, or doesn't have
        ``textures.SKIN.url``
    """
    prop = next((p for p in properties if p.name == TEXTURES_PROPERTY), None)
    if prop is None:
        raise MissingTextures(f'No {TEXTURES_PROPERTY} property in {properties!r}')

    try:
        decoded = base64.b64decode(prop.value, validate=True)
    except ValueError as e:
        # includes binascii.Error and non-ASCII input
        raise DecodeError(f'Texture property is not valid base64: {e}') from e

    try:
        payload = json.loads(decoded)
    except (ValueError, RecursionError) as e:
        # ValueError includes json.JSONDecodeError and UnicodeDecodeError.
        # RecursionError is from deeply nested arrays or objects.
        raise MalformedPayload(f'Texture payload is not JSON: {e}') from e

    textures = payload.get('textures') if isinstance(payload, dict) else None
    if not isinstance(textures, dict):
        raise MalformedPayload(f'Texture payload has no textures object: {payload!r}')

    skin = textures.get('SKIN')
    if not isinstance(skin, dict) or not isinstance(skin.get('url'), str):
        raise MalformedPayload(f'Texture payload has no skin URL: {textures!r}')

    model = None
    if isinstance(metadata := skin.get('metadata'), dict):
        model = metadata.get('model')
        if model is not None and not isinstance(model, str):
            raise MalformedPayload(f'Texture payload has invalid skin model: {model!r}')

    cape = None
    if (cape_obj := textures.get('CAPE')) is not None:
        if not isinstance(cape_obj, dict) or not isinstance(cape_obj.get('url'), str):
            raise MalformedPayload(f'Texture payload has invalid cape: {cape_obj!r}')
        cape = Cape(url=cape_obj['url'])

    return TextureSet(skin=Skin(url=skin['url'], model=model), cape=cape)
