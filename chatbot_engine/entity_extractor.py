"""Regex-based typed entity extraction"""

import re
from typing import Dict, List

from .models import Entity, EntityType


class EntityExtractor:
    """Typed entity extraction with fixed regular expressions"""
    
    def __init__(self):
        # Extraction order is the order entities are reported in
        self.entity_patterns: Dict[EntityType, re.Pattern] = {
            EntityType.TECHNOLOGY: re.compile(
                r'\b(?:java|python|javascript|html|css|sql|database|programming|coding'
                r'|software|ai|machine learning|nlp)\b',
                re.IGNORECASE
            ),
            EntityType.TOPIC: re.compile(
                r'\b(?:weather|time|date|news|sports|music|movies|books|science'
                r'|history|geography)\b',
                re.IGNORECASE
            ),
            EntityType.NUMBER: re.compile(r'\b\d+\b'),
            EntityType.EMAIL: re.compile(
                r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b'
            ),
            EntityType.URL: re.compile(
                r'https?://[\w\-]+(?:\.[\w\-]+)+(?:[\w\-.,@?^=%&:/~+#]*[\w\-@?^=%&/~+#])?'
            ),
            EntityType.DATE: re.compile(
                r'\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b|\b(?:today|tomorrow|yesterday)\b',
                re.IGNORECASE
            ),
            EntityType.TIME: re.compile(
                r'\b\d{1,2}:\d{2}(?:\s?(?:am|pm))?\b|\b(?:morning|afternoon|evening|night)\b',
                re.IGNORECASE
            ),
        }
    
    def extract(self, text: str) -> List[Entity]:
        """Extract every non-overlapping match per type, grouped by type"""
        entities = []
        
        for entity_type, pattern in self.entity_patterns.items():
            for match in pattern.finditer(text):
                entities.append(Entity(
                    type=entity_type,
                    value=match.group().strip(),
                    start=match.start(),
                    end=match.end()
                ))
        
        return entities
    
    def extract_specific_entity(self, text: str, entity_type: EntityType) -> List[Entity]:
        """Extract entities of a single type"""
        pattern = self.entity_patterns[EntityType(entity_type)]
        return [
            Entity(type=EntityType(entity_type), value=match.group().strip(),
                   start=match.start(), end=match.end())
            for match in pattern.finditer(text)
        ]
    
    def get_supported_entities(self) -> List[str]:
        """Get list of supported entity types"""
        return [entity_type.value for entity_type in self.entity_patterns]
