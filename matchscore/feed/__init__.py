"""Feed ranking of candidate users."""

from .ranking import FeedCandidate, FeedEntry, FeedFilter, feed_to_frame, rank_candidates

__all__ = ["FeedCandidate", "FeedEntry", "FeedFilter", "feed_to_frame", "rank_candidates"]
