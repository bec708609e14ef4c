"""Review relay: fetches G2 reviews for a product and filters them by date."""
