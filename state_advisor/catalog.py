from __future__ import annotations

"""
Fixed registry of the state-management solutions the advisor can recommend.

Insertion order is the canonical catalog order: it is what the engine uses to
break ties between candidates with equal scores, so do not re-sort it.
"""

from typing import Dict, Iterable, List, Optional

from .config import Candidate


_CANDIDATES: List[Candidate] = [
    Candidate(
        id="redux-toolkit",
        name="Redux Toolkit",
        description="The official, opinionated, batteries-included toolset for efficient Redux development",
        pros=["Predictable state updates", "Excellent DevTools", "Large ecosystem", "Time-travel debugging"],
        cons=["Learning curve", "Boilerplate for simple apps", "Overkill for small projects"],
        best_for=["Large applications", "Complex state logic", "Team collaboration", "Predictable state updates"],
        difficulty="Medium",
        performance="Excellent",
        learning_curve="Steep",
        installation="npm install @reduxjs/toolkit react-redux",
        code_example="""// store.js
import { configureStore, createSlice } from '@reduxjs/toolkit';

const counterSlice = createSlice({
  name: 'counter',
  initialState: { value: 0 },
  reducers: {
    increment: (state) => { state.value += 1; },
    decrement: (state) => { state.value -= 1; }
  }
});

export const store = configureStore({
  reducer: { counter: counterSlice.reducer }
});

// Component usage
import { useSelector, useDispatch } from 'react-redux';
const count = useSelector(state => state.counter.value);
const dispatch = useDispatch();""",
    ),
    Candidate(
        id="zustand",
        name="Zustand",
        description="A small, fast, and scalable bearbones state-management solution",
        pros=["Simple API", "No providers needed", "TypeScript support", "Small bundle size"],
        cons=["Newer ecosystem", "Less tooling", "No time-travel debugging"],
        best_for=["Medium apps", "Simple global state", "Quick prototyping", "Minimal boilerplate"],
        difficulty="Easy",
        performance="Excellent",
        learning_curve="Gentle",
        installation="npm install zustand",
        code_example="""// store.js
import { create } from 'zustand';

const useStore = create((set) => ({
  count: 0,
  increment: () => set((state) => ({ count: state.count + 1 })),
  decrement: () => set((state) => ({ count: state.count - 1 }))
}));

// Component usage
const { count, increment, decrement } = useStore();""",
    ),
    Candidate(
        id="context-api",
        name="React Context API",
        description="Built-in React solution for sharing state across component tree",
        pros=["Built into React", "No extra dependencies", "Simple for basic use cases"],
        cons=["Performance issues with frequent updates", "Prop drilling for complex state", "No DevTools"],
        best_for=["Small apps", "Theme switching", "User authentication", "Simple global state"],
        difficulty="Easy",
        performance="Good",
        learning_curve="Gentle",
        installation="Built into React - no installation needed",
        code_example="""// Context setup
const StateContext = createContext();

export const StateProvider = ({ children }) => {
  const [count, setCount] = useState(0);
  return (
    <StateContext.Provider value={{ count, setCount }}>
      {children}
    </StateContext.Provider>
  );
};

// Component usage
const { count, setCount } = useContext(StateContext);""",
    ),
    Candidate(
        id="jotai",
        name="Jotai",
        description="Primitive and flexible state management for React",
        pros=["Atomic approach", "No providers", "Great TypeScript support", "Composable"],
        cons=["Different mental model", "Smaller community", "Learning curve for atoms concept"],
        best_for=["Component-level state", "Atomic state management", "Complex derived state", "Modern React apps"],
        difficulty="Medium",
        performance="Excellent",
        learning_curve="Medium",
        installation="npm install jotai",
        code_example="""// atoms.js
import { atom } from 'jotai';

export const countAtom = atom(0);
export const doubleCountAtom = atom((get) => get(countAtom) * 2);

// Component usage
import { useAtom } from 'jotai';
const [count, setCount] = useAtom(countAtom);
const [doubleCount] = useAtom(doubleCountAtom);""",
    ),
    Candidate(
        id="react-query",
        name="TanStack Query (React Query)",
        description="Powerful data-fetching and server state management library",
        pros=["Excellent caching", "Background updates", "Optimistic updates", "Error handling"],
        cons=["Only for server state", "Learning curve", "Not for client-only state"],
        best_for=["API data management", "Server state caching", "Real-time data", "Complex data fetching"],
        difficulty="Medium",
        performance="Excellent",
        learning_curve="Medium",
        installation="npm install @tanstack/react-query",
        code_example="""// Query setup
import { useQuery, QueryClient, QueryClientProvider } from '@tanstack/react-query';

const queryClient = new QueryClient();

// Component usage
const { data, isLoading, error } = useQuery({
  queryKey: ['todos'],
  queryFn: () => fetch('/api/todos').then(res => res.json())
});""",
    ),
    Candidate(
        id="valtio",
        name="Valtio",
        description="Proxy-based state management that feels like vanilla JavaScript",
        pros=["Mutable-like API", "No boilerplate", "Automatic optimization", "Easy to learn"],
        cons=["Proxy-based (compatibility)", "Smaller ecosystem", "Different debugging"],
        best_for=["Quick prototyping", "Simple state updates", "Developers who like mutable APIs"],
        difficulty="Easy",
        performance="Good",
        learning_curve="Gentle",
        installation="npm install valtio",
        code_example="""// store.js
import { proxy, useSnapshot } from 'valtio';

const state = proxy({ count: 0 });

export const increment = () => { state.count++; };
export const decrement = () => { state.count--; };

// Component usage
const snap = useSnapshot(state);
return <div>{snap.count}</div>;""",
    ),
]


def build_catalog(candidates: Iterable[Candidate]) -> Dict[str, Candidate]:
    """
    Index candidates by id, keeping the given order.
    Duplicate ids are a programming error.
    """
    catalog: Dict[str, Candidate] = {}
    for cand in candidates:
        if cand.id in catalog:
            raise ValueError(f"Duplicate candidate id in catalog: {cand.id!r}")
        catalog[cand.id] = cand
    return catalog


CATALOG: Dict[str, Candidate] = build_catalog(_CANDIDATES)


def candidate_ids(catalog: Optional[Dict[str, Candidate]] = None) -> List[str]:
    """Candidate ids in canonical order."""
    return list((catalog if catalog is not None else CATALOG).keys())


def get_candidate(candidate_id: str, catalog: Optional[Dict[str, Candidate]] = None) -> Optional[Candidate]:
    return (catalog if catalog is not None else CATALOG).get(candidate_id)
