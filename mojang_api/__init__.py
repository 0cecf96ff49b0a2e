"""Client for the Mojang API: usernames, profiles, skins, and capes."""
