"""RankBoard: leaderboard pages resolved from ranking indexes."""
