"""TriadDuel - turn-resolution engine for a light/heavy/block duel with quick-time reactions."""
