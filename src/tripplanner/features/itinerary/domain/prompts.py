# features/itinerary/domain/prompts.py
from tripplanner.features.itinerary.domain.models import TripContext

ITINERARY_SYSTEM_PROMPT = (
    "You are an expert travel planner. Generate detailed, practical, and personalized travel "
    "itineraries in JSON format. Always respond with valid JSON matching the specified structure."
)

ITINERARY_USER_PROMPT = """
Create a detailed travel itinerary for the following trip:

Destination: {destination}
Start Date: {start_date}
End Date: {end_date}
Duration: {duration_days} days
{additional_information}

Please provide:
1. A brief summary of the trip (2-3 sentences)
2. Day-by-day itinerary with:
   - Suggested activities with times
   - Locations and descriptions
   - Estimated duration and cost
   - Practical tips
3. General recommendations for:
   - Transportation options
   - Accommodation areas
   - Budget estimates
   - Best time to visit considerations

IMPORTANT: Format the response as valid JSON matching this exact structure:
{{
  "summary": "Brief 2-3 sentence trip overview",
  "days": [
    {{
      "day_number": 1,
      "date": "YYYY-MM-DD",
      "title": "Day title",
      "activities": [
        {{
          "time": "HH:MM",
          "title": "Activity title",
          "description": "Detailed activity description",
          "location": "Specific location name",
          "duration_minutes": 120,
          "cost_estimate": "$$",
          "tips": "Practical tips for this activity"
        }}
      ]
    }}
  ],
  "recommendations": {{
    "transportation": "Transportation recommendations",
    "accommodation": "Accommodation recommendations",
    "budget": "Budget estimates",
    "best_time": "Best time to visit information"
  }}
}}

{rules}

Generate {duration_days} days of activities following the rules above.
"""


def build_itinerary_prompt(trip: TripContext, rules_content: str) -> str:
    """
    Fill the user prompt. ``rules_content`` is inserted unchanged.
    """
    extra = f"Additional Information: {trip.description}" if trip.description else ""
    return ITINERARY_USER_PROMPT.format(
        destination=trip.destination,
        start_date=trip.start_date.isoformat(),
        end_date=trip.end_date.isoformat(),
        duration_days=trip.duration_days,
        additional_information=extra,
        rules=rules_content,
    )
