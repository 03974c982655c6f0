"""Elite BGS API: factions, systems and stations with their history."""
