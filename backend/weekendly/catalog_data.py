"""Built-in activity catalog, themes, and weekend options."""

ACTIVITY_GROUPS = {
    "culinary": {
        "name": "Culinary Experiences",
        "activities": [
            {"id": "gourmet-brunch", "name": "Artisan Brunch Experience", "duration_minutes": 120,
             "vibe": "sophisticated", "time": "10:30", "energy_level": "low", "category": "Indoor",
             "description": "Indulge in a carefully crafted brunch with locally sourced ingredients"},
            {"id": "collaborative-cooking", "name": "Collaborative Cooking Session", "duration_minutes": 150,
             "vibe": "creative", "time": "17:30", "energy_level": "medium", "category": "Indoor",
             "description": "Team up to create culinary masterpieces together"},
            {"id": "wine-discovery", "name": "Wine & Cheese Discovery", "duration_minutes": 180,
             "vibe": "refined", "time": "16:00", "energy_level": "low", "category": "Indoor",
             "description": "Explore exquisite wine and cheese pairings"},
            {"id": "street-food-adventure", "name": "Street Food Expedition", "duration_minutes": 90,
             "vibe": "adventurous", "time": "12:30", "energy_level": "medium", "category": "Outdoor",
             "description": "Discover hidden culinary gems around the city"},
            {"id": "farmers-market", "name": "Farmers Market Tour", "duration_minutes": 120,
             "vibe": "authentic", "time": "09:00", "energy_level": "medium", "category": "Outdoor",
             "description": "Source fresh ingredients and connect with local producers"},
        ],
    },
    "adventure": {
        "name": "Outdoor Expeditions",
        "activities": [
            {"id": "mountain-expedition", "name": "Mountain Trail Expedition", "duration_minutes": 300,
             "vibe": "challenging", "time": "07:30", "energy_level": "high", "category": "Outdoor",
             "description": "Conquer scenic trails and discover breathtaking vistas"},
            {"id": "botanical-picnic", "name": "Botanical Garden Picnic", "duration_minutes": 180,
             "vibe": "serene", "time": "12:00", "energy_level": "low", "category": "Outdoor",
             "description": "Relax among beautiful flora with a gourmet picnic"},
            {"id": "urban-cycling", "name": "Urban Cycling Tour", "duration_minutes": 150,
             "vibe": "dynamic", "time": "09:30", "energy_level": "high", "category": "Outdoor",
             "description": "Explore the city's hidden corners on two wheels"},
            {"id": "astronomy-night", "name": "Astronomical Observatory", "duration_minutes": 180,
             "vibe": "mystical", "time": "21:30", "energy_level": "low", "category": "Outdoor",
             "description": "Gaze at celestial wonders and learn about the cosmos"},
            {"id": "photography-walk", "name": "Photography Expedition", "duration_minutes": 200,
             "vibe": "artistic", "time": "08:00", "energy_level": "medium", "category": "Outdoor",
             "description": "Capture stunning moments and improve your photography skills"},
        ],
    },
    "cultural": {
        "name": "Cultural Immersion",
        "activities": [
            {"id": "cinema-experience", "name": "Independent Cinema Experience", "duration_minutes": 200,
             "vibe": "thoughtful", "time": "19:30", "energy_level": "low", "category": "Indoor",
             "description": "Discover thought-provoking films and engage in discussions"},
            {"id": "live-performance", "name": "Live Musical Performance", "duration_minutes": 180,
             "vibe": "electrifying", "time": "20:30", "energy_level": "medium", "category": "Indoor",
             "description": "Experience the energy of live music in intimate venues"},
            {"id": "gallery-exploration", "name": "Contemporary Art Gallery", "duration_minutes": 150,
             "vibe": "inspiring", "time": "14:30", "energy_level": "low", "category": "Indoor",
             "description": "Explore contemporary art and expand your creative horizons"},
            {"id": "board-game-tournament", "name": "Strategy Game Tournament", "duration_minutes": 240,
             "vibe": "competitive", "time": "19:00", "energy_level": "low", "category": "Indoor",
             "description": "Challenge friends in strategic thinking and friendly competition"},
            {"id": "cultural-workshop", "name": "Cultural Arts Workshop", "duration_minutes": 180,
             "vibe": "creative", "time": "15:00", "energy_level": "medium", "category": "Indoor",
             "description": "Learn traditional crafts and express your creativity"},
        ],
    },
    "mindfulness": {
        "name": "Mindful Living",
        "activities": [
            {"id": "holistic-spa", "name": "Holistic Spa Retreat", "duration_minutes": 300,
             "vibe": "rejuvenating", "time": "10:00", "energy_level": "low", "category": "Indoor",
             "description": "Immerse yourself in complete relaxation and rejuvenation"},
            {"id": "sunrise-yoga", "name": "Sunrise Yoga Session", "duration_minutes": 90,
             "vibe": "energizing", "time": "06:30", "energy_level": "medium", "category": "Outdoor",
             "description": "Start your day with mindful movement and breath work"},
            {"id": "mindfulness-retreat", "name": "Mindfulness Meditation Retreat", "duration_minutes": 120,
             "vibe": "centering", "time": "08:00", "energy_level": "low", "category": "Indoor",
             "description": "Cultivate inner peace and mental clarity through guided meditation"},
            {"id": "literary-journey", "name": "Literary Exploration", "duration_minutes": 180,
             "vibe": "contemplative", "time": "15:30", "energy_level": "low", "category": "Indoor",
             "description": "Dive into captivating stories and expand your literary horizons"},
            {"id": "digital-detox", "name": "Digital Detox Experience", "duration_minutes": 240,
             "vibe": "liberating", "time": "11:00", "energy_level": "low", "category": "Outdoor",
             "description": "Disconnect from technology and reconnect with yourself"},
        ],
    },
    "social": {
        "name": "Social Connections",
        "activities": [
            {"id": "community-volunteering", "name": "Community Volunteering", "duration_minutes": 240,
             "vibe": "meaningful", "time": "09:00", "energy_level": "medium", "category": "Outdoor",
             "description": "Give back to your community and make a positive impact"},
            {"id": "trivia-championship", "name": "Trivia Championship", "duration_minutes": 150,
             "vibe": "competitive", "time": "20:00", "energy_level": "medium", "category": "Indoor",
             "description": "Test your knowledge and compete in friendly trivia battles"},
            {"id": "dance-workshop", "name": "Dance Workshop", "duration_minutes": 120,
             "vibe": "expressive", "time": "18:00", "energy_level": "high", "category": "Indoor",
             "description": "Learn new dance moves and express yourself through movement"},
            {"id": "networking-meetup", "name": "Creative Networking Meetup", "duration_minutes": 180,
             "vibe": "inspiring", "time": "17:00", "energy_level": "medium", "category": "Indoor",
             "description": "Connect with like-minded individuals and expand your network"},
        ],
    },
}

THEMES = {
    "mindfulEscape": {
        "name": "Mindful Escape",
        "activity_ids": ["mindfulness-retreat", "holistic-spa", "botanical-picnic", "literary-journey"],
        "description": "Disconnect from stress and reconnect with inner peace",
        "mood": "serene",
    },
    "urbanExplorer": {
        "name": "Urban Explorer",
        "activity_ids": ["street-food-adventure", "urban-cycling", "photography-walk", "gallery-exploration"],
        "description": "Discover hidden gems and vibrant city culture",
        "mood": "adventurous",
    },
    "creativeSoul": {
        "name": "Creative Soul",
        "activity_ids": ["cultural-workshop", "live-performance", "collaborative-cooking", "cinema-experience"],
        "description": "Express yourself through art, music, and creativity",
        "mood": "inspiring",
    },
    "socialButterfly": {
        "name": "Social Butterfly",
        "activity_ids": ["networking-meetup", "dance-workshop", "trivia-championship", "farmers-market"],
        "description": "Connect with others and build meaningful relationships",
        "mood": "energetic",
    },
    "wellnessWarrior": {
        "name": "Wellness Warrior",
        "activity_ids": ["sunrise-yoga", "mountain-expedition", "digital-detox", "gourmet-brunch"],
        "description": "Prioritize your health and well-being",
        "mood": "balanced",
    },
    "luxurySeeker": {
        "name": "Luxury Seeker",
        # 'independent-cinema' is not in the catalog and is skipped on apply
        "activity_ids": ["wine-discovery", "holistic-spa", "astronomy-night", "independent-cinema"],
        "description": "Indulge in premium experiences and refined pleasures",
        "mood": "sophisticated",
    },
}

WEEKEND_OPTIONS = {
    "twoDays": {"name": "Default", "days": ["saturday", "sunday"]},
    "threeDaysFriday": {"name": "3-Day (Fri-Sun)", "days": ["friday", "saturday", "sunday"]},
    "threeDaysMonday": {"name": "3-Day (Sat-Mon)", "days": ["saturday", "sunday", "monday"]},
    "fourDaysThursday": {"name": "4-Day (Thu-Sun)", "days": ["thursday", "friday", "saturday", "sunday"]},
    "fourDaysMonday": {"name": "4-Day (Fri-Mon)", "days": ["friday", "saturday", "sunday", "monday"]},
    "fourDaysTuesday": {"name": "4-Day (Sat-Tue)", "days": ["saturday", "sunday", "monday", "tuesday"]},
}

DEFAULT_CATALOG = {
    "groups": ACTIVITY_GROUPS,
    "themes": THEMES,
    "weekend_options": WEEKEND_OPTIONS,
}
