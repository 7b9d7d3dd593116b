"""Moving Battleships: naval duel with salvo fire and simultaneous movement."""
