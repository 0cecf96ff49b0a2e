"""Prints a Minecraft user's UUID, name, skin, and cape.

Run inside the mojang_api virtualenv. Takes a username or a UUID, with or
without dashes. Example usage:

python ./get_info.py brecert
python ./get_info.py 7a8084cd-1f44-4a15-9bb1-eef8d5b535a1

Optionally set MOJANG_API_HOST, MOJANG_SESSION_HOST, and MOJANG_TIMEOUT.
"""
import logging
import sys

from mojang_api import profile, user

logging.basicConfig()

if len(sys.argv) != 2:
    print(f'Usage: {sys.argv[0]} USERNAME_OR_UUID', file=sys.stderr)
    sys.exit(1)

name_or_uuid = sys.argv[1]

# usernames are at most 16 characters, UUIDs are 32 or 36
if len(name_or_uuid) > user.MAX_USERNAME_LENGTH:
    uuid = name_or_uuid.replace('-', '')
else:
    user.validate_username(name_or_uuid)
    uuid = user.resolve(name_or_uuid)

prof = profile.fetch(uuid)
textures = prof.textures()

print(f'uuid: {prof.id}')
print(f'name: {prof.name}')
print(f'skin model: {"alex" if prof.slim_model() else "steve"}')
print(f'skin url: {textures.skin.url}')
print(f'cape url: {textures.cape.url if textures.cape else ""}')
