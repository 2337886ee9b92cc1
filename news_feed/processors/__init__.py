"""Topic processing: the fetch, dedup, extract and summarize stages."""

from .topic_processor import RunCancelled, TopicOutput, TopicProcessor, TopicStats

__all__ = ["RunCancelled", "TopicOutput", "TopicProcessor", "TopicStats"]
