def test_imports():
    import climbing_wrapped
    from climbing_wrapped import ClimbRecord, ClimbingStatistics, StatsResult, normalize, process_climbing_data
    from climbing_wrapped.statistics import StatisticsPipeline, StatisticsConfig, aggregate, derive_insights, compare
    assert hasattr(climbing_wrapped, "__all__")
