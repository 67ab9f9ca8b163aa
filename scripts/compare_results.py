import sys
from pathlib import Path

from sdkbench.records import format_duration, load_result
from sdkbench.runner import DEFAULT_TOLERANCE_MS, compare_durations

if len(sys.argv) < 2:
    print('Usage: compare_results.py RESULTS_DIR [TOLERANCE_MS]')
    sys.exit(1)

results_dir = Path(sys.argv[1])
tolerance = int(sys.argv[2]) if len(sys.argv) > 2 else DEFAULT_TOLERANCE_MS

genai = load_result(results_dir / 'genai.json')
langchain = load_result(results_dir / 'langchain.json')

fail = False
for label, record in (('genai', genai), ('langchain', langchain)):
    if record.error is not None:
        print(f'{label} call failed: {record.error}')
        fail = True
    else:
        print(f'{label} duration: {record.duration} ({record.duration_ms}ms)')

if fail:
    sys.exit(1)

difference, within = compare_durations(genai.duration_ms, langchain.duration_ms, tolerance)
print(f'Time difference: {format_duration(difference)} ({difference}ms)')
if not within:
    print(f'Latency difference exceeds {tolerance}ms')
    sys.exit(1)
else:
    print('Latency difference within threshold')
