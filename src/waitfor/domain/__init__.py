"""Domain models: options, schedule, reporting, errors"""
