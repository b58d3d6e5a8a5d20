"""Reuters source adapter — category, topic and author listings as a feed.

Collectors:
    :class:`~newsfeed_adapters.sources.reuters.collector.ReutersCollector`

Router:
    :mod:`newsfeed_adapters.sources.reuters.router`

Configuration:
    :mod:`newsfeed_adapters.sources.reuters.config`
"""
