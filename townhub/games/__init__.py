# Static game content: the Wordle word list and the job challenge question banks
