import copy

import pytest

ITINERARY = {
    "summary": "Three relaxed days in Lisbon mixing viewpoints, food and the riverside.",
    "days": [
        {
            "day_number": 1,
            "date": "2025-06-01",
            "title": "Alfama and the castle",
            "activities": [
                {
                    "time": "09:00",
                    "title": "Castelo de S. Jorge",
                    "description": "Walk the castle walls.",
                    "location": "Castelo de S. Jorge",
                    "duration_minutes": 120,
                    "cost_estimate": "$$",
                    "tips": "Arrive at opening time.",
                },
                {
                    "time": "11:30",
                    "title": "Lunch in Alfama",
                    "description": "Grilled sardines.",
                    "location": "Alfama",
                    "duration_minutes": 90,
                    "cost_estimate": "$",
                    "tips": "Cash is handy.",
                },
                {
                    "time": "14:00",
                    "title": "Miradouro walk",
                    "description": "Viewpoint hopping.",
                    "location": "Graça",
                    "duration_minutes": 120,
                    "cost_estimate": "$",
                    "tips": "Comfortable shoes.",
                },
                {
                    "time": "19:30",
                    "title": "Fado dinner",
                    "description": "Dinner with live fado.",
                    "location": "Alfama",
                    "duration_minutes": 150,
                    "cost_estimate": "$$$",
                    "tips": "Book ahead.",
                },
            ],
        }
    ],
    "recommendations": {
        "transportation": "Use the Viva Viagem card.",
        "accommodation": "Stay in Baixa or Chiado.",
        "budget": "Around 100 EUR per day.",
        "best_time": "Spring and early autumn.",
    },
}


@pytest.fixture
def itinerary_data():
    return copy.deepcopy(ITINERARY)
