# Buzzer output (BCM numbering)
BUZZER_PIN = 18  # Hardware PWM capable pin
DUTY = 50  # Duty cycle in percent
