from strengthlab.services import levels


def competition_ranks(values):
    """Standard competition ranking of an already sorted sequence.

    Equal values share a rank and the next distinct value resumes at its
    position: ``[90, 90, 70] -> [1, 1, 3]``.
    """
    ranks = []
    previous = None
    for position, value in enumerate(values, start=1):
        if ranks and value == previous:
            ranks.append(ranks[-1])
        else:
            ranks.append(position)
        previous = value
    return ranks


class LeaderboardService:
    def __init__(self, stat_service, stats, limit=50):
        self.stat_service = stat_service
        self.stats = stats
        self.limit = limit

    def consistency(self, viewer_id=None, refresh=True):
        if refresh:
            self.stat_service.refresh_all()

        rows = sorted(
            self.stats.student_stats(),
            key=lambda pair: (-pair[1].consistency_score, -pair[1].sessions_completed, pair[0].id),
        )
        ranks = competition_ranks([stat.consistency_score for _, stat in rows])

        return [
            {
                'id': user.id,
                'rank': rank,
                'username': user.username,
                'consistency_score': stat.consistency_score,
                'completed_sessions': stat.sessions_completed,
                'available_sessions': stat.sessions_available,
                'is_you': user.id == viewer_id,
            }
            for rank, (user, stat) in zip(ranks, rows)
        ]

    def strength(self, viewer_id=None, limit=None, refresh=True):
        if refresh:
            self.stat_service.refresh_all()
        limit = limit or self.limit

        rows = sorted(
            self.stats.student_stats(),
            key=lambda pair: (-pair[1].strength_level, -pair[1].total_xp, pair[0].id),
        )
        ranks = competition_ranks([(stat.strength_level, stat.total_xp) for _, stat in rows])

        board = []
        for index, (rank, (user, stat)) in enumerate(zip(ranks, rows)):
            is_you = user.id == viewer_id
            if index >= limit and not is_you:
                continue
            board.append({
                'id': user.id,
                'rank': rank,
                'username': user.username,
                'strength_level': stat.strength_level,
                'total_xp': stat.total_xp,
                'is_you': is_you,
                'next_level_info': self._next_level_info(stat.total_xp) if is_you else None,
            })
        return board

    @staticmethod
    def _next_level_info(total_xp):
        info = levels.next_level_info(total_xp)
        return {
            'xp_needed': info['xp_needed'],
            'progress_percentage': info['progress_percentage'],
            'next_level': info['next_level'],
        }
