"""Curated text used when the generative dependency is unavailable."""

FALLBACK_PROMPTS = [
    "Design a flying classroom that can travel anywhere in the world",
    "Create a device that helps people remember their dreams",
    "Invent a new sport that combines three existing sports",
    "Design a restaurant concept for the year 2050",
    "Create a new musical instrument that uses unconventional materials",
    "Design a sustainable home that could exist in extreme weather conditions",
    "Invent a new holiday and its traditions",
    "Create a transportation system for a city built underwater",
    "Design a device that translates animal communication into human language",
    "Create a new form of art that engages all five senses",
]

CURATED_SOLUTIONS = {
    "Design a flying classroom that can travel anywhere in the world": [
        "The SkySchool is a solar-electric airship with a glass-floored lecture deck. Lessons follow the flight path: "
        "students study plate tectonics while hovering over Iceland's rift valley, then practise Spanish with pen pals "
        "after landing in Oaxaca. The hull is split into a quiet study pod, a wet lab that samples cloud water, and a "
        "galley run by the students themselves. Slow cruising at 80 km/h keeps energy use low and gives every journey "
        "time for reflection. Each trip ends with a documentary the class edits together and shares with the town "
        "that hosted them.",
        "My flying classroom is a fleet of twelve small drones that lock together like puzzle pieces into one floating "
        "room. Separately they carry students in pairs to field sites; docked, they form a classroom with a holographic "
        "ceiling that maps the terrain below in real time. A teacher sets a question such as 'why is this river "
        "brown?', the fleet splits up to collect evidence, and reassembles for the debate. Redundancy makes it safe: "
        "any drone can land the others if one fails.",
    ],
    "Create a device that helps people remember their dreams": [
        "DreamCatch is a soft headband paired with a bedside lamp. It watches for REM sleep using a tiny EEG sensor and, "
        "a few minutes after a REM phase ends, brightens the lamp just enough to half-wake the sleeper. A voice "
        "prompt asks, 'What were you just seeing?' and the person mumbles an answer that is transcribed and tagged by "
        "emotion. In the morning the app stitches fragments into a dream journal with recurring symbols highlighted, "
        "so users start to notice patterns across weeks instead of forgetting everything by breakfast.",
        "Instead of recording dreams after waking, the Echo Pillow plants memory anchors before sleep. You pick a scent "
        "and a short melody at bedtime; the pillow replays faint versions of both during REM. On waking, the same scent "
        "and melody play again, cueing recall through association. A simple sketch pad on the nightstand encourages "
        "drawing the first image that comes to mind, because images survive waking better than words.",
    ],
    "Invent a new sport that combines three existing sports": [
        "Rally Climb mixes bouldering, volleyball and relay racing. Two teams share a climbing wall split by a net. "
        "Climbers must pass a light ball over the net while holding on, and every rally they win lets a teammate "
        "sprint to the base and start a new route. Falling off gives the other side a free serve. The result rewards "
        "grip strength, teamwork and quick decisions, and it is thrilling to watch because the score and the climbers "
        "rise at the same time.",
        "Paddle Polo Orienteering combines kayaking, water polo and orienteering on a lake course. Teams of four carry "
        "a ball between floating checkpoints they must find with a map and compass. At each checkpoint they score by "
        "shooting into a bobbing goal guarded by the opposing team's keeper, who is chasing them in their own kayak. "
        "Navigation mistakes cost more than missed shots, so the smartest team usually beats the strongest.",
        "Chess Boxing was only the start: Tri-Duel alternates three-minute rounds of fencing, table tennis and speed "
        "chess. Physical rounds tire players out right before they must think clearly, and a lead on the chess board "
        "can be protected by playing defensively with the racket. Points carry across disciplines, so a specialist "
        "cannot win on one skill alone.",
    ],
    "Design a restaurant concept for the year 2050": [
        "Root & Orbit is a vertical-farm restaurant where every table sits beside the plants it will eat from. Diners "
        "scan a leaf to see its nutrient profile and harvest it themselves before the kitchen robots cook it at the "
        "table on induction stones. Protein comes from a fermentation bar that brews mycoprotein to order. Waste is "
        "zero by design of the menu: stems become stock, peels feed the insect farm downstairs, and the insects "
        "return as crunchy toppings.",
        "Memory Kitchen is a 2050 restaurant that cooks the dishes of your past. Before booking you share a few stories "
        "about meals you loved; a culinary AI turns them into a tasting menu that recreates grandmother's soup or the "
        "street food from your first trip abroad, using sustainable substitutes. Each course arrives with a short "
        "audio note narrating the memory, so dinner becomes a shared story between friends.",
    ],
    "Create a new musical instrument that uses unconventional materials": [
        "The Ice Harp is a frame of frozen columns tuned by their length and hollowness. Players strike them with felt "
        "mallets or bow them with a wet rosin bow; as the room warms, the pitch drifts, so every performance changes "
        "over its lifetime. Contact microphones frozen into each column send the sound to a small amplifier. Concerts "
        "are held in winter courtyards and the melted water is collected to freeze the next harp.",
        "Bottle Bloom is built from recycled glass bottles arranged in a spiral around a bicycle wheel. Pedalling spins "
        "the wheel, and leather flaps brush past the bottle mouths to make them sing like blown flutes. Water levels "
        "set the pitch, and players tune by pouring from a jug between songs. It is cheap, loud, and easy for a "
        "community group to build in an afternoon.",
    ],
    "Design a sustainable home that could exist in extreme weather conditions": [
        "The Tortoise House is a low, domed home dug halfway into the ground. Earth berms keep the interior near 18 C "
        "through desert heat and arctic cold, while a rammed-earth shell resists storms. A central skylight works as "
        "a thermal chimney, pulling hot air out in summer and sealing with an insulated cap in winter. Rainwater "
        "collects in a cistern under the floor, and a vertical wind turbine lies flat automatically when gusts pass "
        "120 km/h.",
        "My design is a modular home on hydraulic legs that adapt to the weather. During floods it rises; during "
        "hurricanes it lowers and clamps to its foundation, folding its solar panels into armoured shutters. Walls are "
        "hempcrete panels that regulate humidity and store carbon. A shared battery links neighbouring homes so power "
        "keeps flowing when one roof is damaged.",
    ],
    "Invent a new holiday and its traditions": [
        "Lantern of Small Thanks is held on the longest night of the year. Everyone writes a thank-you note to someone "
        "who helped them in an ordinary way, such as a bus driver or a neighbour, and folds it into a paper lantern. At "
        "dusk, neighbourhoods walk the lanterns to the recipients' doors. The tradition ends with a shared soup made "
        "from one ingredient brought by each household, symbolising how small contributions add up.",
        "Swap Day is a holiday for trying someone else's life for a morning. Friends and relatives exchange one daily "
        "routine: a teenager cooks breakfast for a grandparent who learns to play their video game. In the afternoon "
        "everyone gathers to share what surprised them. The only gift allowed is a skill taught in under ten minutes.",
    ],
    "Create a transportation system for a city built underwater": [
        "The city moves on Currents, a network of pressurised glass tubes where pods ride a gentle water flow driven by "
        "tidal turbines. Pods are neutrally buoyant, so very little energy is needed to push them; at junctions, "
        "adjustable vanes steer them like switches on a railway. For short trips residents use personal jet scooters "
        "in open lanes marked by bioluminescent buoys, and cargo travels on slow submarine trains along the seabed.",
        "Instead of tubes, the city uses Kelp Lines: tethered cables that run between districts, with cabins that "
        "clip on and glide along them like underwater gondolas. The cables double as anchors that stabilise the "
        "domes. Each cabin has its own oxygen supply for emergencies and a transparent floor so commuters can watch "
        "the marine life that the city is built to protect.",
    ],
    "Design a device that translates animal communication into human language": [
        "PawSense is a collar with a microphone, accelerometer and heart-rate sensor. Rather than pretending to "
        "translate words, it learns each animal's patterns and maps them to a small vocabulary of needs: hungry, "
        "anxious, playful, in pain, wants outside. The owner confirms or corrects each guess in the app, so the model "
        "improves for that specific pet. Shelters can pool anonymised data to recognise stress early in new arrivals.",
        "The Chorus Buoy listens to whales and dolphins in open water. It uses a hydrophone array to isolate "
        "individual callers and matches their clicks and songs against annotated recordings from marine biologists. "
        "Output is not a sentence but a live caption such as 'contact call, mother to calf, 300 m north', streamed to "
        "boats nearby so they can slow down and avoid collisions.",
    ],
    "Create a new form of art that engages all five senses": [
        "Synesthesia Rooms are small galleries where a single theme, such as 'first rain', is expressed through every "
        "sense at once: projected droplets on the walls, the smell of wet earth, cool mist on the skin, a sip of "
        "mineral water, and layered recordings of thunder. Visitors move through three rooms that tell a story from "
        "drought to storm to calm. Artists compose the rooms like music, with each sense as an instrument.",
        "Edible Murals are large relief paintings made from spices, sugar and herbs. Visitors see the colours, smell "
        "the spices, feel the textures, hear a soundtrack triggered by touch sensors in the frame, and are invited to "
        "taste a designated corner. Each mural slowly changes as people interact with it, so the artwork becomes a "
        "record of its audience.",
    ],
}

GENERIC_SOLUTIONS = [
    "My approach to \"{prompt}\" starts from the people it serves. I would interview a handful of future users, "
    "list the three frustrations they mention most, and design directly against them. The core idea is a modular "
    "system: a simple base version that works anywhere, plus optional add-ons that adapt it to local needs. "
    "Sustainable materials keep costs and footprint low, and a feedback loop built into the design means each "
    "version improves on the last. The result is practical on day one and keeps getting better.",
    "For \"{prompt}\", I would combine two ideas that rarely meet: the playfulness of a game and the rigour of a "
    "scientific experiment. Users would take part in short challenges that generate useful data, and the system "
    "would adapt in response, making every interaction both fun and meaningful. Simple rules, visible progress and "
    "shared results would keep people engaged, while careful testing ensures the concept works outside the lab.",
    "The heart of my answer to \"{prompt}\" is borrowing from nature. Many living systems already solve similar "
    "problems through patterns such as branching, layering and cooperation. I would model the design on one of "
    "those patterns, use local renewable resources, and keep the structure flexible so it can grow or shrink as "
    "demand changes. It is innovative because it reframes the problem, and logical because nature has already "
    "tested the solution for millions of years.",
]

# Returned by the opponent solver when nothing else can produce a solution.
# The judge looks for OPPONENT_FAILURE_MARKER inside the opponent's text.
OPPONENT_FAILURE_MARKER = "unable to generate a solution"
OPPONENT_FAILURE_TEXT = (
    "The AI was unable to generate a solution at this time due to technical difficulties."
)

CRITERIA = ('originality', 'logic', 'expression')

# Feedback pools keyed by outcome for the party ('winner' or 'loser'), then criterion.
FEEDBACK_POOLS = {
    'winner': {
        'originality': [
            "A genuinely fresh angle that stands apart from the obvious answers.",
            "The central idea is inventive and reframes the challenge in a memorable way.",
            "Surprising connections between ideas give this solution real novelty.",
        ],
        'logic': [
            "The plan is coherent and addresses the practical constraints convincingly.",
            "Each part of the idea supports the others; it feels buildable.",
            "Clear reasoning about how the idea would work in the real world.",
        ],
        'expression': [
            "Vivid, well-structured writing that makes the idea easy to picture.",
            "Communicated clearly and with energy; the key points land quickly.",
            "Engaging language with a strong sense of flow.",
        ],
    },
    'loser': {
        'originality': [
            "Some interesting touches, but the core idea is close to familiar concepts.",
            "The concept is reasonable but takes a fairly expected route.",
            "A few creative sparks that could be pushed much further.",
        ],
        'logic': [
            "Parts of the plan are feasible, though key details are left open.",
            "The idea holds together loosely; more thought about constraints would help.",
            "Some practical gaps make it hard to see how this would work end to end.",
        ],
        'expression': [
            "Understandable, but the structure makes the main idea harder to follow.",
            "Clear enough, though the writing could be more vivid and concise.",
            "The key points are there but get lost in the delivery.",
        ],
    },
}

COMMENTARY_POOLS = {
    'user': [
        "A strong showing from the challenger: the solution combined original thinking with a clear, practical plan "
        "and edged out the AI overall.",
        "The challenger's answer felt more inventive and more personal. The AI was competent, but the human solution "
        "took more creative risks and they paid off.",
        "Both sides brought solid ideas, but the challenger's originality and expression carried the battle.",
    ],
    'ai': [
        "The AI's solution was more complete and better argued this time. The challenger had promising ideas that "
        "needed more development to compete.",
        "A close contest, but the AI combined feasibility and clarity more consistently than the challenger.",
        "The challenger showed creativity, yet the AI's answer was more detailed and easier to follow, which decided "
        "the battle.",
    ],
}

SENTINEL_FEEDBACK = {
    'winner': "Submitted a complete solution to the prompt.",
    'loser': "No solution was produced.",
    'commentary': (
        "The AI opponent could not produce a solution for this battle, so the challenger wins automatically."
    ),
}

DEGENERATE_FEEDBACK = {
    'loser': "The solution provides insufficient detail to evaluate this criterion.",
    'winner': "A complete, developed response to the prompt.",
    'commentary': (
        "The challenger's solution was too short and provided insufficient detail to compete, so the AI opponent "
        "wins this battle. Try describing your idea in more depth next time."
    ),
}
