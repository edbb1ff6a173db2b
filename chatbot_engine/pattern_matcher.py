"""Canned responses for common queries"""

import re
from datetime import datetime
from typing import Callable, List, Optional, Tuple, Union


Responder = Union[str, Callable[[], str]]


class PatternMatcher:
    """First-match lookup over an ordered list of (regex, response) pairs.

    Responses may be callables so that time and date answers are computed
    when the query arrives rather than when the matcher was built.
    """
    
    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock
        self.patterns: List[Tuple[re.Pattern, Responder]] = []
        self._initialize_patterns()
    
    def _initialize_patterns(self):
        self.add_pattern(r"what.*(time|clock)", self._current_time)
        self.add_pattern(r"what.*(date|today)", self._current_date)
        self.add_pattern(
            r"\d+\s*[+\-*/]\s*\d+",
            "I can see you're asking about math! For calculations, I'd recommend using a calculator."
        )
        self.add_pattern(
            r"weather|temperature|rain|sunny|cloudy",
            "I don't have access to real-time weather data. Please check a weather app or website."
        )
        self.add_pattern(
            r"what.*(your name|are you called)",
            "I'm an AI assistant created to help answer your questions and have conversations!"
        )
        self.add_pattern(
            r"what.*can.*you.*do",
            "I can help with questions, provide information, assist with programming concepts, "
            "and have conversations!"
        )
    
    def add_pattern(self, regex: str, response: Responder):
        """Append a pattern; earlier patterns win"""
        self.patterns.append((re.compile(regex, re.IGNORECASE), response))
    
    def match(self, text: str) -> Optional[str]:
        """Response of the first pattern found anywhere in text, or None"""
        for pattern, response in self.patterns:
            if pattern.search(text):
                return response() if callable(response) else response
        return None
    
    def _current_time(self) -> str:
        return "The current time is " + self.clock().strftime("%H:%M")
    
    def _current_date(self) -> str:
        return "Today is " + self.clock().strftime("%B %d, %Y")
